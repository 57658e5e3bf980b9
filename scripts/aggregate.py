#!/usr/bin/env python3
"""Aggregate phase-estimation run JSONs into a summary table.

- Flattens nested records (diagnostics_*, artifacts_*).
- Writes one row per run to results/summary.csv.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import pandas as pd

from bayesphase.analysis import flatten_record


def main(input_dir: str = 'runs', output_csv: str = 'results/summary.csv') -> None:
    input_dir = Path(input_dir)
    records = []

    for json_file in sorted(input_dir.glob('*.json')):
        with open(json_file, 'r') as f:
            data = json.load(f)
        records.append(flatten_record(data))

    if not records:
        print(f"No JSON files found in {input_dir}")
        return

    df = pd.DataFrame(records).sort_values(["eigenphase", "seed"])

    out_csv = Path(output_csv)
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_csv, index=False)
    print(f"Wrote summary of {len(df)} runs to {out_csv}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Aggregate phase-estimation JSON outputs into CSV')
    parser.add_argument('--input', default='runs', help='Directory containing JSON files')
    parser.add_argument('--csv', default='results/summary.csv', help='Output CSV path')
    args = parser.parse_args()
    main(args.input, args.csv)
