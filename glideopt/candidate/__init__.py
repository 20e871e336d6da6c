"""Candidate representations the annealing engine can mutate."""

from .base import Candidate, CandidateFactory, Score
from .index_candidate import IndexCandidate, random_candidate

__all__ = [
    "Candidate",
    "CandidateFactory",
    "IndexCandidate",
    "Score",
    "random_candidate",
]
