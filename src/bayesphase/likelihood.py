"""Measurement likelihood on the phase grid.

For an inversion angle ``theta`` and evolution time ``t`` the oracle
returns ``One`` with probability ``sin^2((phi - theta) t / 2)`` and
``Zero`` with the complementary ``cos^2`` probability.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Iterable

import numpy as np

from .errors import InvalidArgument, NumericalDegeneracy

# Roundoff allowed outside [0, 1] before a likelihood is rejected
PROBABILITY_EPS = 1e-12


class Outcome(IntEnum):
    """Binary measurement result."""
    ZERO = 0
    ONE = 1


def check_probabilities(values: Iterable[float]) -> np.ndarray:
    """Clip roundoff excursions outside ``[0, 1]``; reject anything larger.

    Entries within :data:`PROBABILITY_EPS` of the interval are clipped,
    larger excursions (or NaN) raise :class:`NumericalDegeneracy`.
    """
    values = np.asarray(values, dtype=float)
    if not np.all((values >= -PROBABILITY_EPS) & (values <= 1.0 + PROBABILITY_EPS)):
        raise NumericalDegeneracy("likelihood left [0, 1] beyond roundoff tolerance")
    return np.clip(values, 0.0, 1.0)


def likelihood_at(
    grid: Iterable[float],
    time: float,
    inversion_angle: float,
    outcome: Outcome,
) -> np.ndarray:
    """Return ``Pr(outcome | phi; time, inversion_angle)`` at every grid point."""
    time = float(time)
    inversion_angle = float(inversion_angle)
    if not (math.isfinite(time) and time > 0.0):
        raise InvalidArgument(f"time must be positive and finite, got {time}")
    if not math.isfinite(inversion_angle):
        raise InvalidArgument(f"inversion_angle must be finite, got {inversion_angle}")
    if outcome not in (Outcome.ZERO, Outcome.ONE):
        raise InvalidArgument(f"outcome must be Outcome.ZERO or Outcome.ONE, got {outcome!r}")

    phi = np.asarray(grid, dtype=float)
    arg = (phi - inversion_angle) * time / 2.0
    if outcome == Outcome.ONE:
        values = np.sin(arg) ** 2
    else:
        values = np.cos(arg) ** 2

    return check_probabilities(values)
