"""Error taxonomy for the phase estimator.

Every failure is fatal to the current run and propagates to the caller
without a partial result.
"""

from __future__ import annotations


class EstimationError(Exception):
    """Base class for all estimation failures."""


class InvalidArgument(EstimationError, ValueError):
    """Malformed grid, density or likelihood input."""


class NumericalDegeneracy(EstimationError, ArithmeticError):
    """A normalisation integral is zero, vanishingly small, NaN or infinite."""


class OracleFailure(EstimationError, RuntimeError):
    """The measurement oracle raised or returned a non-binary outcome."""
