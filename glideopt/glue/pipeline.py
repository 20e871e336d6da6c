"""Command line pipeline orchestrating track loading and annealing runs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from ..config.config import DEFAULTS
from ..data.generate_data import generate_track
from ..data.models import Track
from ..engine.annealing import SimAnnealingOptimizer
from ..logging.run_log import save_best_json
from ..scoring import get_score
from .io import load_config, load_track, save_task_json

logger = logging.getLogger(__name__)


def _track_path(base_dir: Path, rel: str) -> Path:
    path = Path(rel)
    return path if path.is_absolute() else (base_dir / path).resolve()


def assemble_track(cfg: Dict[str, Any], base_dir: Path) -> Track:
    """Load the track named by ``dataset.track`` or synthesise one."""

    dataset = cfg.get("dataset", {}) or {}
    track_path = dataset.get("track")
    if track_path is not None:
        return load_track(_track_path(base_dir, track_path))

    synth = dataset.get("synthetic", {}) or {}
    n = int(synth.get("n_points", 200))
    seed = int(synth.get("seed", 0))
    logger.info("no dataset.track given, generating a %d point random walk (seed=%d)", n, seed)
    return generate_track(n_points=n, seed=seed, step=float(synth.get("step", 1.0)))


def build_params(cfg: Dict[str, Any]) -> Dict[str, Any]:
    params = DEFAULTS.copy()
    params.update(cfg.get("params", {}) or {})
    if "seed" in cfg:
        params["seed"] = None if cfg["seed"] is None else int(cfg["seed"])
    if "n_points" in cfg:
        params["n_points"] = int(cfg["n_points"])
    return params


def run_pipeline(
    cfg: Dict[str, Any],
    *,
    base_dir: Path,
    outdir: Path,
    export_trace: bool = False,
) -> Dict[str, Any]:
    """Run the optimizer according to ``cfg`` and write diagnostics to ``outdir``."""

    outdir.mkdir(parents=True, exist_ok=True)

    track = assemble_track(cfg, base_dir)
    params = build_params(cfg)
    score = get_score(params["score"])

    optimizer = SimAnnealingOptimizer.from_params(params)
    result = optimizer.run(track, int(params["n_points"]), score)

    meta = {
        "seed": optimizer.seed,
        "config_version": cfg.get("version", "dev"),
        "track_points": len(track),
    }

    if export_trace:
        trace_path = outdir / "trace.npz"
        rows = [row for row in result.run_log.rows if row[4] is not None]
        np.savez(
            trace_path,
            temp=np.array([row[2] for row in rows], dtype=np.float64),
            curr=np.array([row[3] for row in rows], dtype=np.float64),
            best=np.array([row[4] for row in rows], dtype=np.float64),
            best_indices=np.array(result.best_task.indices, dtype=np.int64),
        )
        meta["trace"] = str(trace_path)

    save_best_json(outdir / "run.json", result, params, extra=meta)
    save_task_json(outdir / "best_task.json", result.best_task, result.best_score)
    result.run_log.save_json(outdir / "run_log.json")
    result.run_log.save_csv(outdir / "run_log.csv")

    return {
        "result": result,
        "track": track,
        "params": params,
        "meta": meta,
    }


def load_and_run(
    config_path: Path,
    outdir: Path,
    *,
    seed_override: Optional[int] = None,
    export_trace: bool = False,
) -> Dict[str, Any]:
    """Convenience wrapper combining ``load_config`` and :func:`run_pipeline`."""

    cfg = load_config(config_path)
    if seed_override is not None:
        cfg["seed"] = int(seed_override)

    base_dir = Path(config_path).resolve().parent
    return run_pipeline(cfg, base_dir=base_dir, outdir=outdir, export_trace=export_trace)


def build_arg_parser():
    import argparse

    ap = argparse.ArgumentParser(description="Simulated annealing task optimizer")
    ap.add_argument("--config", required=True, help="Path to YAML/JSON configuration")
    ap.add_argument("--outdir", required=True, help="Output directory")
    ap.add_argument("--seed", type=int, default=None, help="Optional RNG seed override")
    ap.add_argument(
        "--trace",
        action="store_true",
        help="Export compact trace.npz alongside the run log",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return ap


def main(argv: Optional[list[str]] = None) -> Dict[str, Any]:
    ap = build_arg_parser()
    args = ap.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    outdir = Path(args.outdir).resolve()
    cfg_path = Path(args.config).resolve()

    out = load_and_run(
        cfg_path,
        outdir,
        seed_override=args.seed,
        export_trace=args.trace,
    )

    result = out["result"]
    summary = {
        "best_score": float(result.best_score),
        "best_indices": list(result.best_task.indices),
        "iterations": result.iterations,
        "accepted": result.accepted,
        "seed": out["meta"]["seed"],
    }

    print("\n[DONE]")
    print(json.dumps(summary, indent=2))
    return out


__all__ = [
    "assemble_track",
    "build_arg_parser",
    "build_params",
    "load_and_run",
    "main",
    "run_pipeline",
]
