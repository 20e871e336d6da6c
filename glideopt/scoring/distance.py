import numpy as np

from ._numba_utils import polyline_length


def path_length_score(task):
    """Planar length of the path through the task points (higher is better)."""
    coords = np.ascontiguousarray(task.coords(), dtype=np.float64)
    return float(polyline_length(coords))
