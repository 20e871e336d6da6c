"""Annealing engine: control loop, acceptance rules and failure modes."""

from .acceptance import acceptance_prob, metropolis_prob
from .annealing import (
    AnnealingResult,
    SimAnnealingOptimizer,
    expected_iterations,
    new_sim_annealing_optimizer,
    run_annealing,
)
from .errors import DegenerateCandidate, InvalidParameters, OptimizerError

__all__ = [
    "AnnealingResult",
    "DegenerateCandidate",
    "InvalidParameters",
    "OptimizerError",
    "SimAnnealingOptimizer",
    "acceptance_prob",
    "expected_iterations",
    "metropolis_prob",
    "new_sim_annealing_optimizer",
    "run_annealing",
]
