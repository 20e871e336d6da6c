"""Configuration and track loading helpers for the command-line glue layer.

Configuration is YAML or JSON; tracks are CSV or Parquet point tables read
through Pandas and handed to the engine as a :class:`~glideopt.data.models.Track`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

import numpy as np
import pandas as pd
import yaml

from ..data.models import Task, Track


def load_config(path_cfg: Path) -> Dict:
    """Parse a run configuration; ``.json`` files as JSON, anything else as YAML.

    Recognised top-level keys are ``seed``, ``n_points``, ``version``,
    ``params`` (overrides for :data:`glideopt.config.config.DEFAULTS`) and
    ``dataset`` (``track`` path relative to the config file, or a
    ``synthetic`` block with ``n_points``/``seed``/``step``). An empty file
    yields ``{}``.
    """

    path = Path(path_cfg)
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return {}

    if path.suffix.lower() == ".json":
        return json.loads(text)

    cfg = yaml.safe_load(text)
    return cfg or {}


def _read_frame(path_like: Path) -> pd.DataFrame:
    path = Path(path_like)
    if path.suffix.lower() in {".parquet", ".pq"}:
        return pd.read_parquet(path)
    return pd.read_csv(path)


def load_track(path_table: Path) -> Track:
    """Load track points from a CSV/Parquet table with ``x``/``y`` (and optional ``t``)."""

    df = _read_frame(path_table)
    if not {"x", "y"}.issubset(df.columns):
        raise ValueError("track table must contain 'x' and 'y' columns")
    if len(df.index) == 0:
        raise ValueError(f"empty track table: {path_table}")

    points = df[["x", "y"]].to_numpy(dtype=np.float64, copy=True)
    times = df["t"].to_numpy(dtype=np.float64, copy=True) if "t" in df.columns else None

    track = Track(points=points, times=times)
    validate_track(track)
    return track


def validate_track(track: Track) -> None:
    """Run lightweight shape and value checks on a loaded track."""

    points = np.asarray(track.points)
    if points.ndim != 2 or points.shape[1] != 2:
        raise ValueError("track points must have shape (n, 2)")
    if points.shape[0] == 0:
        raise ValueError("track must contain at least one point")
    if not np.all(np.isfinite(points)):
        raise ValueError("track points must be finite")
    if track.times is not None:
        times = np.asarray(track.times)
        if not np.all(np.isfinite(times)):
            raise ValueError("track times must be finite")
        if np.any(np.diff(times) < 0):
            raise ValueError("track times must be non-decreasing")


def save_task_json(path: Path, task: Task, score: float) -> None:
    data = {"score": float(score)}
    data.update(task.to_dict())
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


__all__ = [
    "load_config",
    "load_track",
    "save_task_json",
    "validate_track",
]
