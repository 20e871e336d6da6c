"""Failure modes surfaced by the annealing engine."""


class OptimizerError(Exception):
    """Base class for optimizer failures."""


class InvalidParameters(OptimizerError, ValueError):
    """Temperature, cooling or size settings that cannot drive a run."""


class DegenerateCandidate(OptimizerError):
    """A candidate could not be generated, mutated or scored."""
