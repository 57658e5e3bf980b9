"""Numeric helpers shared by the grid filter.

* :func:`integrate` – trapezoidal rule over an ordered grid.
* :func:`multiply` – elementwise product of two equal-length sequences.

Both are pure and return fresh arrays/floats.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .errors import InvalidArgument


def _as_vector(x: Iterable[float], name: str) -> np.ndarray:
    arr = np.asarray(x, dtype=float)
    if arr.ndim != 1:
        raise InvalidArgument(f"{name} must be one-dimensional, got shape {arr.shape}")
    return arr


def integrate(xs: Iterable[float], ys: Iterable[float]) -> float:
    """Trapezoidal-rule integral of samples ``ys`` taken at ``xs``.

    Parameters
    ----------
    xs : sequence of float
        Strictly increasing abscissae, at least two of them.
    ys : sequence of float
        Function samples, same length as ``xs``.

    Returns
    -------
    float
        ``sum((ys[i] + ys[i+1]) / 2 * (xs[i+1] - xs[i]))``.  Exact for
        piecewise-linear data.
    """
    x = _as_vector(xs, "xs")
    y = _as_vector(ys, "ys")
    if x.size != y.size:
        raise InvalidArgument(f"length mismatch: len(xs)={x.size}, len(ys)={y.size}")
    if x.size < 2:
        raise InvalidArgument(f"need at least 2 points to integrate, got {x.size}")
    dx = np.diff(x)
    if not np.all(dx > 0):
        raise InvalidArgument("xs must be strictly increasing")
    return float(np.sum(0.5 * (y[1:] + y[:-1]) * dx))


def multiply(a: Iterable[float], b: Iterable[float]) -> np.ndarray:
    """Elementwise product ``a[i] * b[i]``."""
    a_arr = _as_vector(a, "a")
    b_arr = _as_vector(b, "b")
    if a_arr.size != b_arr.size:
        raise InvalidArgument(f"length mismatch: len(a)={a_arr.size}, len(b)={b_arr.size}")
    return a_arr * b_arr
