import numpy as np

from ..data.models import Task


class IndexCandidate:
    """Strictly increasing track indices, one per task point.

    The generator is shared with the optimizer that created the candidate so
    a single seed reproduces the whole run.
    """

    __slots__ = ("track", "indices", "rng", "task")

    def __init__(self, track, indices, rng):
        self.track = track
        self.indices = np.asarray(indices, dtype=np.int64)
        self.rng = rng
        self.task = Task.from_track(track, self.indices)

    def __repr__(self):
        return f"IndexCandidate(indices={list(self.task.indices)})"

    def _free_slots(self):
        """Open positions strictly between each index and its neighbours."""
        n = len(self.track)
        idx = self.indices
        lo = np.concatenate(([-1], idx[:-1]))
        hi = np.concatenate((idx[1:], [n]))
        return lo, hi, hi - lo - 2

    def neighbour(self):
        """Move one index to another free position between its neighbours."""
        lo, hi, room = self._free_slots()
        movable = np.flatnonzero(room > 0)
        if movable.size == 0:
            return IndexCandidate(self.track, self.indices.copy(), self.rng)

        pos = int(self.rng.choice(movable))
        cur = int(self.indices[pos])
        # draw from (lo, hi) minus the current slot
        v = int(self.rng.integers(lo[pos] + 1, hi[pos] - 1))
        if v >= cur:
            v += 1

        new_idx = self.indices.copy()
        new_idx[pos] = v
        return IndexCandidate(self.track, new_idx, self.rng)


def random_candidate(n_points, track, rng):
    """Pick ``n_points`` distinct track points, kept in track order."""
    n = len(track)
    if n_points < 1:
        raise ValueError("n_points must be >= 1")
    if n_points > n:
        raise ValueError(f"cannot place {n_points} points on a track of {n}")
    idx = np.sort(rng.choice(n, size=n_points, replace=False))
    return IndexCandidate(track, idx, rng)
