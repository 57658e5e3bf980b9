"""Phase grid and belief density.

The grid is ``N`` uniformly spaced points on ``[0, 1]`` and is frozen
(read-only) at construction.  The density starts as the *unnormalised*
uniform prior (all ones) and is replaced once per trial by
:meth:`GridModel.update`.
"""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from .errors import InvalidArgument, NumericalDegeneracy
from .numerics import integrate, multiply


# Smallest admissible evidence in GridModel.update.  The integral of
# density * likelihood is the predictive probability of the observed
# outcome; below this the grid carries no usable mass.
DEGENERACY_FLOOR = 1e-15


class GridModel:
    """Owns the phase grid and the (prior or posterior) density over it."""

    def __init__(self, n_grid_points: int) -> None:
        if isinstance(n_grid_points, bool) or not isinstance(n_grid_points, (int, np.integer)):
            raise InvalidArgument(f"n_grid_points must be an integer, got {n_grid_points!r}")
        if n_grid_points < 2:
            raise InvalidArgument(f"n_grid_points must be >= 2, got {n_grid_points}")
        grid = np.linspace(0.0, 1.0, int(n_grid_points))
        grid.setflags(write=False)
        self._grid = grid
        self._set_density(np.ones_like(grid))

    @property
    def grid(self) -> np.ndarray:
        return self._grid

    @property
    def density(self) -> np.ndarray:
        """Current density (read-only; replaced only by :meth:`update`)."""
        return self._density

    @property
    def size(self) -> int:
        return int(self._grid.size)

    def _set_density(self, values: np.ndarray) -> None:
        values.setflags(write=False)
        self._density = values

    def _check_aligned(self, values: Iterable[float], name: str) -> np.ndarray:
        arr = np.asarray(values, dtype=float)
        if arr.shape != self._grid.shape:
            raise InvalidArgument(
                f"{name} must have shape {self._grid.shape}, got {arr.shape}"
            )
        return arr

    def renormalize(self, unnormalized: Iterable[float]) -> np.ndarray:
        """Return ``unnormalized / integrate(grid, unnormalized)``.

        Raises
        ------
        InvalidArgument
            Wrong length or negative entries.
        NumericalDegeneracy
            The integral is zero, NaN or infinite.
        """
        values = self._check_aligned(unnormalized, "unnormalized density")
        if np.any(values < 0.0):
            raise InvalidArgument("density values must be non-negative")
        total = integrate(self._grid, values)
        if not np.isfinite(total) or total <= 0.0:
            raise NumericalDegeneracy(
                f"cannot renormalize: density integral is {total!r}; "
                "the grid has lost all probability mass"
            )
        return values / total

    def update(self, likelihood: Iterable[float]) -> np.ndarray:
        """Fold one likelihood vector into the density and renormalise.

        The density entering here has unit mass, so the integral of
        ``density * likelihood`` is the predictive probability of the
        observed outcome; at or below :data:`DEGENERACY_FLOOR` the update
        is rejected with :class:`NumericalDegeneracy`.
        """
        likelihood = self._check_aligned(likelihood, "likelihood")
        unnormalized = multiply(self._density, likelihood)
        evidence = integrate(self._grid, unnormalized)
        if np.isfinite(evidence) and evidence <= DEGENERACY_FLOOR:
            raise NumericalDegeneracy(
                f"observed outcome has predictive probability {evidence!r}; "
                "the grid has lost all probability mass"
            )
        self._set_density(self.renormalize(unnormalized))
        return self._density

    def posterior_mean(self, density: Optional[Iterable[float]] = None) -> float:
        """``integrate(grid, grid * density)``; defaults to the stored density."""
        rho = self._density if density is None else self._check_aligned(density, "density")
        return integrate(self._grid, multiply(self._grid, rho))

    def posterior_variance(self, density: Optional[Iterable[float]] = None) -> float:
        """Second central moment of a normalised density over the grid."""
        rho = self._density if density is None else self._check_aligned(density, "density")
        mean = self.posterior_mean(rho)
        centred = (self._grid - mean) ** 2
        # Clamp tiny negative values from roundoff
        return max(integrate(self._grid, multiply(centred, rho)), 0.0)
