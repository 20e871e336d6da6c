from __future__ import annotations

from typing import Any, Callable, Protocol

import numpy as np


class Candidate(Protocol):
    """Tentative solution wrapping a task the score function evaluates."""

    task: Any

    def neighbour(self) -> "Candidate":
        ...


# candidate_factory(n_points, track, rng) -> Candidate
CandidateFactory = Callable[[int, Any, np.random.Generator], Candidate]

# score(task) -> float, higher is better
Score = Callable[[Any], float]
