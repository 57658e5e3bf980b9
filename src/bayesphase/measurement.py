"""Measurement oracle interface.

The estimator only needs an object with ``query(time, inversion_angle)``
returning a binary :class:`~bayesphase.likelihood.Outcome`.  How that
outcome is physically produced is outside this package;
:class:`SimulatedOracle` samples the documented response law classically
so runs and tests can be driven without a backend.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Protocol, runtime_checkable

import numpy as np

from .errors import InvalidArgument, OracleFailure
from .likelihood import Outcome


@runtime_checkable
class MeasurementOracle(Protocol):
    def query(self, time: float, inversion_angle: float) -> Outcome:
        ...


def coerce_outcome(value: Any) -> Outcome:
    """Validate an oracle response and convert it to :class:`Outcome`.

    ``Outcome`` members, ``bool`` and integral 0/1 (including numpy
    integers) are accepted; everything else raises :class:`OracleFailure`.
    """
    if isinstance(value, Outcome):
        return value
    if isinstance(value, (bool, np.bool_)):
        return Outcome.ONE if value else Outcome.ZERO
    if isinstance(value, (int, np.integer)) and int(value) in (0, 1):
        return Outcome(int(value))
    raise OracleFailure(f"oracle returned a non-binary outcome: {value!r}")


class SimulatedOracle:
    """Samples outcomes with ``Pr(One) = sin^2((eigenphase - angle) * time / 2)``."""

    def __init__(self, eigenphase: float, rng: Optional[np.random.Generator] = None) -> None:
        eigenphase = float(eigenphase)
        if not math.isfinite(eigenphase):
            raise InvalidArgument(f"eigenphase must be finite, got {eigenphase}")
        self.eigenphase = eigenphase
        self.rng = np.random.default_rng() if rng is None else rng
        self.calls = 0

    def probability_one(self, time: float, inversion_angle: float) -> float:
        return math.sin((self.eigenphase - inversion_angle) * time / 2.0) ** 2

    def query(self, time: float, inversion_angle: float) -> Outcome:
        self.calls += 1
        p_one = self.probability_one(time, inversion_angle)
        return Outcome.ONE if self.rng.random() < p_one else Outcome.ZERO
