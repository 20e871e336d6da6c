import numpy as np

from .models import Track


def generate_track(n_points=200, seed=0, step=1.0):
    """Seeded 2-D random walk with one time unit between fixes."""
    rng = np.random.default_rng(seed)
    steps = rng.normal(0.0, step, size=(n_points, 2))
    steps[0] = 0.0
    points = np.cumsum(steps, axis=0)
    times = np.arange(n_points, dtype=np.float64)
    return Track(points=points, times=times)
