"""Trial schedule: evolution time and inversion angle per trial.

``time = (9/8) ** trial_index`` grows geometrically so later trials
resolve finer phase differences.  The schedule does not depend on
measured outcomes.
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

import numpy as np

from .errors import InvalidArgument, NumericalDegeneracy

TIME_GROWTH = 9.0 / 8.0
DEFAULT_MAX_INVERSION_ANGLE = 0.02


def next_trial_params(
    trial_index: int,
    max_inversion_angle: float = DEFAULT_MAX_INVERSION_ANGLE,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[float, float]:
    """Return ``(time, inversion_angle)`` for trial ``trial_index``.

    The angle is drawn from ``Uniform[0, max_inversion_angle]`` using
    ``rng``; pass a seeded generator for reproducible runs.
    """
    if isinstance(trial_index, bool) or not isinstance(trial_index, (int, np.integer)):
        raise InvalidArgument(f"trial_index must be an integer, got {trial_index!r}")
    if trial_index < 0:
        raise InvalidArgument(f"trial_index must be >= 0, got {trial_index}")
    max_inversion_angle = float(max_inversion_angle)
    if not math.isfinite(max_inversion_angle) or max_inversion_angle < 0.0:
        raise InvalidArgument(
            f"max_inversion_angle must be finite and >= 0, got {max_inversion_angle}"
        )
    rng = np.random.default_rng() if rng is None else rng
    try:
        time = TIME_GROWTH ** int(trial_index)
    except OverflowError as exc:
        raise NumericalDegeneracy(
            f"evolution time for trial {trial_index} overflows a float"
        ) from exc
    inversion_angle = float(rng.uniform(0.0, max_inversion_angle))
    return time, inversion_angle
