# src/bayesphase/estimator.py
"""Sequential Bayesian grid estimator.

Each trial draws ``(time, inversion_angle)`` from the schedule, queries
the oracle once, multiplies the density by the likelihood of the
observed outcome and renormalises.  The final estimate is the posterior
mean over the grid.

The loop is strictly sequential and blocking; any failure aborts the
run with no partial result (the instance ends in ``FAILED``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

import numpy as np

from .errors import InvalidArgument, NumericalDegeneracy, OracleFailure
from .grid import GridModel
from .likelihood import Outcome, likelihood_at
from .measurement import MeasurementOracle, coerce_outcome
from .schedule import DEFAULT_MAX_INVERSION_ANGLE, next_trial_params

logger = logging.getLogger(__name__)

PRIOR_MEAN_TOL = 1e-9

ScheduleFn = Callable[[int, float, np.random.Generator], Tuple[float, float]]


class EstimatorState(Enum):
    INIT = "init"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class TrialResult:
    """One completed trial, handed to the ``on_trial`` callback."""
    trial_index: int
    time: float
    inversion_angle: float
    outcome: Outcome
    posterior_mean: float


class SequentialEstimator:
    """Single-use estimator driving a :class:`GridModel` from oracle outcomes.

    Parameters
    ----------
    oracle : MeasurementOracle
        Object with ``query(time, inversion_angle)``.
    n_grid_points : int
        Grid size, ``>= 2``.
    n_measurements : int
        Number of trials, ``>= 0``.
    max_inversion_angle : float
        Upper bound of the uniform inversion-angle draw.
    rng : numpy.random.Generator, optional
        Random source for the schedule; one per run.
    schedule : callable, optional
        ``schedule(trial_index, max_inversion_angle, rng) -> (time, angle)``.
    check_prior : bool
        Verify the uniform prior's mean is 0.5 at construction.
    on_trial : callable, optional
        Receives a :class:`TrialResult` after every density update.
    """

    def __init__(
        self,
        oracle: MeasurementOracle,
        n_grid_points: int,
        n_measurements: int,
        max_inversion_angle: float = DEFAULT_MAX_INVERSION_ANGLE,
        rng: Optional[np.random.Generator] = None,
        schedule: ScheduleFn = next_trial_params,
        check_prior: bool = True,
        on_trial: Optional[Callable[[TrialResult], None]] = None,
    ) -> None:
        if isinstance(n_measurements, bool) or not isinstance(n_measurements, (int, np.integer)):
            raise InvalidArgument(f"n_measurements must be an integer, got {n_measurements!r}")
        if n_measurements < 0:
            raise InvalidArgument(f"n_measurements must be >= 0, got {n_measurements}")
        if not callable(getattr(oracle, "query", None)):
            raise InvalidArgument("oracle must provide query(time, inversion_angle)")

        self.oracle = oracle
        self.n_measurements = int(n_measurements)
        self.max_inversion_angle = float(max_inversion_angle)
        self.rng = np.random.default_rng() if rng is None else rng
        self.schedule = schedule
        self.on_trial = on_trial
        self.model = GridModel(n_grid_points)
        self.last_time: Optional[float] = None

        prior_mean = self.model.posterior_mean()
        logger.debug("Uniform prior mean on %d points: %.12f", self.model.size, prior_mean)
        if check_prior and abs(prior_mean - 0.5) > PRIOR_MEAN_TOL:
            raise NumericalDegeneracy(f"uniform prior mean is {prior_mean}, expected 0.5")
        self.state = EstimatorState.INIT

    def _query(self, time: float, inversion_angle: float) -> Outcome:
        try:
            raw = self.oracle.query(time, inversion_angle)
        except OracleFailure:
            raise
        except Exception as exc:
            raise OracleFailure(
                f"oracle query failed at time={time}, inversion_angle={inversion_angle}: {exc}"
            ) from exc
        return coerce_outcome(raw)

    def step(self, trial_index: int) -> TrialResult:
        """Run trial ``trial_index`` and fold its outcome into the density.

        Only valid while the estimator is ``RUNNING`` (i.e. from :meth:`run`).
        """
        if self.state is not EstimatorState.RUNNING:
            raise RuntimeError(f"step() requires a running estimator (state={self.state.value})")
        time, inversion_angle = self.schedule(trial_index, self.max_inversion_angle, self.rng)
        outcome = self._query(time, inversion_angle)
        likelihood = likelihood_at(self.model.grid, time, inversion_angle, outcome)
        self.model.update(likelihood)
        self.last_time = time
        result = TrialResult(
            trial_index=trial_index,
            time=time,
            inversion_angle=inversion_angle,
            outcome=outcome,
            posterior_mean=self.model.posterior_mean(),
        )
        logger.debug(
            "trial %d: t=%.6g theta=%.6g outcome=%d mean=%.6f",
            trial_index, time, inversion_angle, int(outcome), result.posterior_mean,
        )
        return result

    def run(self) -> float:
        """Execute all trials and return the posterior-mean phase estimate."""
        if self.state is not EstimatorState.INIT:
            raise RuntimeError(f"estimator already used (state={self.state.value})")
        self.state = EstimatorState.RUNNING
        logger.info(
            "Starting estimation: %d grid points, %d measurements",
            self.model.size, self.n_measurements,
        )
        try:
            for trial_index in range(self.n_measurements):
                result = self.step(trial_index)
                if self.on_trial is not None:
                    self.on_trial(result)
            estimate = self.model.posterior_mean()
        except Exception:
            self.state = EstimatorState.FAILED
            raise
        self.state = EstimatorState.DONE
        logger.info("Estimation finished: phase estimate %.6f", estimate)
        return estimate

    @property
    def posterior_std(self) -> float:
        return float(np.sqrt(self.model.posterior_variance()))


def estimate_phase(
    oracle: MeasurementOracle,
    n_grid_points: int,
    n_measurements: int,
    max_inversion_angle: float = DEFAULT_MAX_INVERSION_ANGLE,
    rng: Optional[np.random.Generator] = None,
) -> float:
    """One-shot helper: build a :class:`SequentialEstimator` and run it."""
    estimator = SequentialEstimator(
        oracle,
        n_grid_points,
        n_measurements,
        max_inversion_angle=max_inversion_angle,
        rng=rng,
    )
    return estimator.run()
