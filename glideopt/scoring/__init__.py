"""Score functions mapping a task to a fitness value."""

from .distance import path_length_score

SCORES = {
    "path_length": path_length_score,
}


def get_score(name):
    try:
        return SCORES[name]
    except KeyError:
        raise ValueError(f"Unknown score={name!r}. Use one of {sorted(SCORES)}") from None


__all__ = ["SCORES", "get_score", "path_length_score"]
