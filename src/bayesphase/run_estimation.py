# src/bayesphase/run_estimation.py
"""Phase-estimation orchestrator: sweep eigenphases x seeds from a YAML config."""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import numpy as np
import yaml

from .estimator import SequentialEstimator
from .measurement import SimulatedOracle
from .schedule import DEFAULT_MAX_INVERSION_ANGLE

logger = logging.getLogger(__name__)


def compute_sha256_of_obj(obj) -> str:
    """SHA-256 of a JSON-serialisable object (sorted keys, compact separators)."""
    s = json.dumps(obj, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(s).hexdigest()


def load_config(config_path: str | Path) -> Dict[str, Any]:
    cfg = yaml.safe_load(Path(config_path).read_text()) or {}
    for key in ("eigenphases", "seeds"):
        if key not in cfg:
            raise KeyError(f"{key} missing from configuration")
    return cfg


def run_condition(
    cfg: Dict[str, Any],
    eigenphase: float,
    seed: int,
    out_dir: Path,
    config_hash: str = "",
) -> Dict[str, Any]:
    """Run one estimation and write its JSON record."""
    # Independent streams for the schedule and the simulated oracle
    schedule_seq, oracle_seq = np.random.SeedSequence(seed).spawn(2)
    schedule_rng = np.random.default_rng(schedule_seq)
    oracle = SimulatedOracle(eigenphase, rng=np.random.default_rng(oracle_seq))

    est_cfg = cfg.get("estimation", {}) or {}
    n_grid_points = int(est_cfg.get("n_grid_points", 20000))
    n_measurements = int(est_cfg.get("n_measurements", 60))
    max_angle = float(est_cfg.get("max_inversion_angle", DEFAULT_MAX_INVERSION_ANGLE))
    check_prior = bool(est_cfg.get("check_prior", True))

    estimator = SequentialEstimator(
        oracle,
        n_grid_points,
        n_measurements,
        max_inversion_angle=max_angle,
        rng=schedule_rng,
        check_prior=check_prior,
    )
    estimate = estimator.run()

    record = {
        "sim": "bayesian_phase_estimation",
        "eigenphase": eigenphase,
        "seed": seed,
        "n_grid_points": n_grid_points,
        "n_measurements": n_measurements,
        "max_inversion_angle": max_angle,
        "estimate": estimate,
        "abs_error": abs(estimate - eigenphase),
        "posterior_std": estimator.posterior_std,
        "diagnostics": {
            "oracle_calls": oracle.calls,
            "final_time": estimator.last_time,
            "state": estimator.state.value,
        },
        "artifacts": {
            "config_hash": config_hash,
        },
    }

    out_dir.mkdir(parents=True, exist_ok=True)
    fname = f"phase{eigenphase}_seed{seed}.json"
    with (out_dir / fname).open("w") as f_json:
        json.dump(record, f_json, indent=2)
    print(f"Expected phase: {eigenphase:.6f}  Estimated phase: {estimate:.6f}  (seed {seed})")
    print(f"Wrote {out_dir / fname}")
    return record


def main(config_path: str = "configs/bayesian_phase.yaml", output_dir: str = "runs") -> List[Dict[str, Any]]:
    """Iterate over eigenphases x seeds and write one JSON per run."""
    cfg = load_config(config_path)
    out_dir = Path(output_dir)
    config_hash = compute_sha256_of_obj(cfg)

    records = []
    for eigenphase in cfg["eigenphases"]:
        for seed in cfg["seeds"]:
            records.append(run_condition(cfg, float(eigenphase), int(seed), out_dir, config_hash))
    logger.info("Completed %d runs into %s", len(records), out_dir)
    return records


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Run Bayesian grid phase estimation over a config sweep")
    parser.add_argument("--config", default="configs/bayesian_phase.yaml", help="Path to configuration YAML")
    parser.add_argument("--output", default="runs", help="Output directory for per-run JSON files")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    main(args.config, args.output)
