#!/usr/bin/env python3
"""
Accuracy gates for Bayesian phase estimation.

Reads the aggregated CSV (from scripts/aggregate.py), groups runs by
eigenphase and applies the gates:

Gates
-----
1) Accuracy: median |estimate - eigenphase| <= tol for every eigenphase.
2) Finite:   no NaN/inf estimates in any run.

Outputs:
- results/acceptance_report.json (machine-readable)
- console summary

Exit code:
- 0 if all gates pass, 1 otherwise.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import pandas as pd

from bayesphase.analysis import summarize_errors

TOL = 0.02


def main(summary_csv: str, tol: float = TOL) -> int:
    df = pd.read_csv(summary_csv)
    summary = summarize_errors(df)

    per_phase = []
    for row in summary.to_dict(orient="records"):
        row["accuracy_pass"] = bool(row["median_abs_error"] <= tol)
        per_phase.append(row)

    overall_pass = bool(per_phase) and all(r["accuracy_pass"] and r["all_finite"] for r in per_phase)

    report = {
        "summary_csv": summary_csv,
        "tol": float(tol),
        "per_phase": per_phase,
        "overall_pass": overall_pass,
    }

    out_dir = Path("results")
    out_dir.mkdir(parents=True, exist_ok=True)
    with open(out_dir / "acceptance_report.json", "w") as f:
        json.dump(report, f, indent=2)

    print("\n=== Phase Estimation Acceptance Report ===")
    for r in per_phase:
        print(
            f"phi={r['eigenphase']:.4f} :: runs={r['n_runs']}  "
            f"median|err|={r['median_abs_error']:.5f}  sem={r['abs_error_sem']:.5f}  "
            f"finite={r['all_finite']}  pass={r['accuracy_pass']}"
        )
    print(f"OVERALL :: {'PASS' if overall_pass else 'FAIL'}")
    return 0 if overall_pass else 1


if __name__ == "__main__":
    p = argparse.ArgumentParser(description="Run accuracy gates over the aggregated summary")
    p.add_argument("--summary", default="results/summary.csv", help="Path to aggregated CSV")
    p.add_argument("--tol", type=float, default=TOL, help="Max median absolute error per eigenphase")
    args = p.parse_args()
    raise SystemExit(main(args.summary, args.tol))
