from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from .acceptance import ACCEPTANCE_RULES, accept_move
from .errors import DegenerateCandidate, InvalidParameters
from ..candidate.base import CandidateFactory, Score
from ..candidate.index_candidate import random_candidate
from ..config.config import DEFAULTS
from ..logging.run_log import RunLog

logger = logging.getLogger(__name__)


@dataclass
class AnnealingResult:
    best_task: Any
    best_score: float
    last_task: Any
    iterations: int
    accepted: int
    improved_best: int
    run_log: RunLog


def validate_schedule(start_temperature, min_temperature, alpha):
    if not start_temperature > 0.0:
        raise InvalidParameters(f"start_temperature must be > 0, got {start_temperature}")
    if not min_temperature > 0.0:
        raise InvalidParameters(f"min_temperature must be > 0, got {min_temperature}")
    if not start_temperature > min_temperature:
        raise InvalidParameters(
            f"start_temperature ({start_temperature}) must exceed "
            f"min_temperature ({min_temperature})"
        )
    if not 0.0 < alpha < 1.0:
        raise InvalidParameters(f"alpha must be in (0, 1), got {alpha}")


def expected_iterations(start_temperature, min_temperature, alpha):
    """Loop count of a geometric schedule: ceil(log(min/start) / log(1 - alpha))."""
    if start_temperature <= min_temperature:
        return 0
    return int(math.ceil(math.log(min_temperature / start_temperature) / math.log(1.0 - alpha)))


def _score(score, candidate):
    try:
        val = float(score(candidate.task))
    except Exception as exc:
        raise DegenerateCandidate(f"scoring failed for {candidate!r}: {exc}") from exc
    if not math.isfinite(val):
        raise DegenerateCandidate(f"non-finite score {val} for {candidate!r}")
    return val


def run_annealing(
    track,
    n_points,
    score,
    rng,
    *,
    start_temperature,
    min_temperature,
    alpha,
    candidate_factory=random_candidate,
    acceptance="linear",
    log_placeholder=True,
):
    """Anneal from a random candidate until the temperature reaches the floor.

    ``best`` follows the freshly generated neighbour, not the accepted
    position: a neighbour that is rejected as a move can still become best.
    """
    try:
        accept_rule = ACCEPTANCE_RULES[acceptance]
    except KeyError:
        raise InvalidParameters(
            f"Unknown acceptance={acceptance!r}. Use one of {sorted(ACCEPTANCE_RULES)}"
        ) from None
    if n_points < 1:
        raise InvalidParameters(f"n_points must be >= 1, got {n_points}")

    try:
        curr = candidate_factory(n_points, track, rng)
    except Exception as exc:
        raise DegenerateCandidate(f"could not build an initial candidate: {exc}") from exc
    curr_score = _score(score, curr)
    best, best_score = curr, curr_score

    temp = float(start_temperature)
    run_log = RunLog(placeholder=log_placeholder)
    iterations = accepted = improved_best = 0

    logger.info(
        "annealing start: n_points=%d, T0=%g, T_min=%g, alpha=%g, score=%g",
        n_points,
        temp,
        min_temperature,
        alpha,
        curr_score,
    )

    while temp > min_temperature:
        # only reachable with a negative floor in lax mode
        if temp <= 0.0:
            raise InvalidParameters(
                f"temperature fell to {temp} above min_temperature={min_temperature}; "
                "the floor must be positive"
            )
        try:
            cand = curr.neighbour()
        except Exception as exc:
            raise DegenerateCandidate(f"neighbour generation failed for {curr!r}: {exc}") from exc
        cand_score = _score(score, cand)

        prob = accept_rule(curr_score, cand_score, temp)
        if accept_move(prob, rng):
            curr, curr_score = cand, cand_score
            accepted += 1

        if cand_score > best_score:
            best, best_score = cand, cand_score
            improved_best += 1
            logger.debug("iter %d: new best %g at T=%g", iterations + 1, best_score, temp)

        # cooling
        temp *= 1.0 - alpha
        iterations += 1

        run_log.append(curr, best, temp, curr_score=curr_score, best_score=best_score)

    logger.info(
        "annealing done: iterations=%d, accepted=%d, improved_best=%d, best=%g",
        iterations,
        accepted,
        improved_best,
        best_score,
    )

    return AnnealingResult(
        best_task=best.task,
        best_score=best_score,
        last_task=curr.task,
        iterations=iterations,
        accepted=accepted,
        improved_best=improved_best,
        run_log=run_log,
    )


class SimAnnealingOptimizer:
    """Simulated annealing over candidates placed on a track.

    The generator is seeded once here and handed to the candidate factory on
    every run, so consecutive ``optimize`` calls continue one stream while
    two optimizers built with the same seed reproduce each other.
    """

    def __init__(
        self,
        start_temperature: float,
        min_temperature: float,
        alpha: float,
        seed: Optional[int] = None,
        *,
        candidate_factory: CandidateFactory = random_candidate,
        acceptance: str = "linear",
        strict: bool = True,
        emit_run_log: bool = True,
        log_placeholder: bool = True,
        log_stream=None,
    ):
        if strict:
            validate_schedule(start_temperature, min_temperature, alpha)
        if acceptance not in ACCEPTANCE_RULES:
            raise InvalidParameters(
                f"Unknown acceptance={acceptance!r}. Use one of {sorted(ACCEPTANCE_RULES)}"
            )
        if seed is None:
            seed = time.time_ns()

        self.start_temperature = float(start_temperature)
        self.min_temperature = float(min_temperature)
        self.alpha = float(alpha)
        self.seed = int(seed)
        self.rng = np.random.default_rng(self.seed)
        self.candidate_factory = candidate_factory
        self.acceptance = acceptance
        self.emit_run_log = emit_run_log
        self.log_placeholder = log_placeholder
        self.log_stream = log_stream
        self.last_result: Optional[AnnealingResult] = None

    @classmethod
    def from_params(cls, params, **kwargs):
        return cls(
            float(params.get("start_temperature", DEFAULTS["start_temperature"])),
            float(params.get("min_temperature", DEFAULTS["min_temperature"])),
            float(params.get("alpha", DEFAULTS["alpha"])),
            params.get("seed"),
            acceptance=params.get("acceptance", DEFAULTS["acceptance"]),
            strict=bool(params.get("strict", DEFAULTS["strict"])),
            emit_run_log=bool(params.get("emit_run_log", DEFAULTS["emit_run_log"])),
            log_placeholder=bool(params.get("log_placeholder", DEFAULTS["log_placeholder"])),
            **kwargs,
        )

    def run(self, track, n_points: int, score: Score) -> AnnealingResult:
        result = run_annealing(
            track,
            n_points,
            score,
            self.rng,
            start_temperature=self.start_temperature,
            min_temperature=self.min_temperature,
            alpha=self.alpha,
            candidate_factory=self.candidate_factory,
            acceptance=self.acceptance,
            log_placeholder=self.log_placeholder,
        )
        self.last_result = result
        if self.emit_run_log:
            result.run_log.emit(self.log_stream)
        return result

    def optimize(self, track, n_points: int, score: Score):
        """Return the best task found; see :func:`run_annealing`."""
        return self.run(track, n_points, score).best_task


def new_sim_annealing_optimizer(**kwargs) -> SimAnnealingOptimizer:
    """Optimizer with the stock schedule (1000 -> 1, alpha 0.003), time seeded."""
    return SimAnnealingOptimizer(
        DEFAULTS["start_temperature"],
        DEFAULTS["min_temperature"],
        DEFAULTS["alpha"],
        time.time_ns(),
        **kwargs,
    )
