"""Numba-accelerated geometry kernels shared by score functions."""

from __future__ import annotations

import numpy as np
from numba import njit


@njit(cache=True)
def polyline_length(coords):
    """Sum of Euclidean leg lengths through ``coords`` ``(k, 2)`` in order.

    Returns ``0.0`` for fewer than two points.
    """

    total = 0.0
    for i in range(1, coords.shape[0]):
        dx = coords[i, 0] - coords[i - 1, 0]
        dy = coords[i, 1] - coords[i - 1, 1]
        total += np.sqrt(dx * dx + dy * dy)
    return total
