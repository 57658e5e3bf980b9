"""Bayesian grid phase estimation package.

This package estimates an unknown phase in ``[0, 1]`` by sequentially
querying a binary-outcome oracle and updating a discretised belief
density after every query.  Modules are organized by responsibility:

* :mod:`numerics` – Trapezoidal integration and elementwise products.
* :mod:`grid` – The fixed phase grid, its density, renormalisation and
  posterior moments.
* :mod:`likelihood` – The ``sin^2``/``cos^2`` measurement likelihood on
  the grid.
* :mod:`schedule` – Geometric evolution times and random inversion
  angles for each trial.
* :mod:`measurement` – The oracle protocol, outcome validation and a
  classical simulated oracle.
* :mod:`estimator` – The sequential update loop and final estimate.
* :mod:`analysis` – Run flattening and accuracy summaries.

The orchestrator :mod:`run_estimation` ties together configuration
parsing, the estimation sweep and result serialization.
"""

from .errors import (EstimationError,
                     InvalidArgument,
                     NumericalDegeneracy,
                     OracleFailure)
from .numerics import integrate, multiply
from .grid import GridModel
from .likelihood import Outcome, likelihood_at
from .schedule import next_trial_params
from .measurement import (MeasurementOracle,
                          SimulatedOracle,
                          coerce_outcome)
from .estimator import (EstimatorState,
                        SequentialEstimator,
                        TrialResult,
                        estimate_phase)

__all__ = [
    'EstimationError',
    'InvalidArgument',
    'NumericalDegeneracy',
    'OracleFailure',
    'integrate',
    'multiply',
    'GridModel',
    'Outcome',
    'likelihood_at',
    'next_trial_params',
    'MeasurementOracle',
    'SimulatedOracle',
    'coerce_outcome',
    'EstimatorState',
    'SequentialEstimator',
    'TrialResult',
    'estimate_phase',
]
