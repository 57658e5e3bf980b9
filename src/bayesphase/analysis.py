"""Summary statistics over estimation runs.

Notes:
- Run records are nested dicts; :func:`flatten_record` turns them into
  flat rows for tabular output.
- Error bars across seeds use the jackknife standard error of the mean.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List

import numpy as np
import pandas as pd


def flatten_record(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested dictionaries for tabular output (depth-first)."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        k = f"{prefix}{key}" if prefix == "" else f"{prefix}_{key}"
        if isinstance(value, dict):
            flat.update(flatten_record(value, prefix=k))
        else:
            flat[k] = value
    return flat


def jackknife_err(values: Iterable[float]) -> float:
    """Jackknife standard error of the mean for a 1D sequence."""
    x = np.asarray(list(values), dtype=float)
    n = x.size
    if n <= 1:
        return 0.0
    loo_means = (x.sum() - x) / (n - 1)
    var_jk = (n - 1) / n * float(np.sum((loo_means - x.mean()) ** 2))
    return float(np.sqrt(max(var_jk, 0.0)))


def summarize_errors(df: pd.DataFrame) -> pd.DataFrame:
    """Per-eigenphase accuracy summary of a flattened run table.

    Expects columns ``eigenphase``, ``estimate`` and ``abs_error``;
    ``posterior_std`` is summarised when present.
    """
    missing = [c for c in ("eigenphase", "estimate", "abs_error") if c not in df.columns]
    if missing:
        raise KeyError(f"summary table is missing columns: {missing}")

    rows: List[Dict[str, Any]] = []
    for eigenphase, g in df.groupby("eigenphase", sort=True):
        err = g["abs_error"].to_numpy(float)
        est = g["estimate"].to_numpy(float)
        row = {
            "eigenphase": float(eigenphase),
            "n_runs": int(len(g)),
            "mean_estimate": float(np.mean(est)),
            "mean_abs_error": float(np.mean(err)),
            "median_abs_error": float(np.median(err)),
            "abs_error_sem": jackknife_err(err),
            "all_finite": bool(np.all(np.isfinite(est))),
        }
        if "posterior_std" in g.columns:
            row["mean_posterior_std"] = float(g["posterior_std"].astype(float).mean())
        rows.append(row)
    return pd.DataFrame(rows)
