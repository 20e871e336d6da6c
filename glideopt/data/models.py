from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


@dataclass
class Track:
    """Ordered spatial points a candidate places its task points over.

    ``points`` has shape ``(n, 2)``; ``times`` is optional and, when present,
    holds one timestamp per point.
    """

    points: np.ndarray
    times: Optional[np.ndarray] = None

    def __post_init__(self):
        self.points = np.asarray(self.points, dtype=np.float64)
        if self.points.ndim != 2 or self.points.shape[1] != 2:
            raise ValueError("track points must have shape (n, 2)")
        if self.times is not None:
            self.times = np.asarray(self.times, dtype=np.float64)
            if self.times.shape != (self.points.shape[0],):
                raise ValueError("track times must have one entry per point")

    def __len__(self) -> int:
        return int(self.points.shape[0])


@dataclass(frozen=True)
class Task:
    indices: Tuple[int, ...]
    points: Tuple[Tuple[float, float], ...]

    @classmethod
    def from_track(cls, track: Track, indices) -> "Task":
        idx = tuple(int(i) for i in indices)
        pts = tuple((float(track.points[i, 0]), float(track.points[i, 1])) for i in idx)
        return cls(indices=idx, points=pts)

    def coords(self) -> np.ndarray:
        return np.asarray(self.points, dtype=np.float64).reshape(-1, 2)

    def to_dict(self):
        return {
            "indices": list(self.indices),
            "points": [list(p) for p in self.points],
        }
