import json
import math

import numpy as np
import pytest

from glideopt.candidate.index_candidate import random_candidate
from glideopt.data.generate_data import generate_track
from glideopt.engine.annealing import (
    SimAnnealingOptimizer,
    expected_iterations,
    new_sim_annealing_optimizer,
    run_annealing,
)
from glideopt.engine.errors import DegenerateCandidate, InvalidParameters
from glideopt.scoring import path_length_score


class _WalkCandidate:
    """Integer random walk; the task is the integer itself."""

    def __init__(self, value, rng):
        self.task = value
        self.rng = rng

    def neighbour(self):
        return _WalkCandidate(self.task + int(self.rng.integers(-3, 4)), self.rng)


def _walk_factory(n_points, track, rng):
    return _WalkCandidate(int(rng.integers(0, 100)), rng)


def _identity(task):
    return float(task)


def _optimizer(start, stop, alpha, seed=0, **kwargs):
    kwargs.setdefault("candidate_factory", _walk_factory)
    kwargs.setdefault("emit_run_log", False)
    return SimAnnealingOptimizer(start, stop, alpha, seed, **kwargs)


def test_expected_iterations_default_schedule():
    # ln(0.001) / ln(0.997) = 2299.09...
    assert expected_iterations(1000.0, 1.0, 0.003) == 2300


@pytest.mark.parametrize(
    "start,stop,alpha",
    [
        (1000.0, 1.0, 0.003),
        (100.0, 1.0, 0.1),
        (50.0, 2.0, 0.25),
        (10.0, 9.0, 0.5),
    ],
)
def test_iteration_count_matches_schedule(start, stop, alpha):
    expected = expected_iterations(start, stop, alpha)
    for seed in (0, 1, 2):
        result = _optimizer(start, stop, alpha, seed).run(None, 1, _identity)
        assert result.iterations == expected
        assert len(result.run_log) == expected + 1


def test_best_score_never_decreases():
    result = _optimizer(100.0, 1.0, 0.05, seed=3).run(None, 1, _identity)
    scores = [s for s in result.run_log.best_scores if s is not None]
    assert scores
    assert all(b >= a for a, b in zip(scores, scores[1:]))
    assert result.best_score == scores[-1]
    assert result.best_task == max(row[1].task for row in result.run_log.rows[1:])


def test_temperature_strictly_decreases():
    result = _optimizer(100.0, 1.0, 0.1, seed=4).run(None, 1, _identity)
    temps = result.run_log.temperatures[1:]
    assert all(b < a for a, b in zip(temps, temps[1:]))
    assert temps[-1] <= 1.0
    assert temps[-2] > 1.0


def test_same_seed_reproduces_run():
    track = generate_track(n_points=40, seed=1)
    a = SimAnnealingOptimizer(50.0, 1.0, 0.05, 7, emit_run_log=False)
    b = SimAnnealingOptimizer(50.0, 1.0, 0.05, 7, emit_run_log=False)

    res_a = a.run(track, 4, path_length_score)
    res_b = b.run(track, 4, path_length_score)

    curr_a = [row[0].task for row in res_a.run_log.rows[1:]]
    curr_b = [row[0].task for row in res_b.run_log.rows[1:]]
    assert curr_a == curr_b
    assert res_a.best_task == res_b.best_task
    assert res_a.accepted == res_b.accepted


def test_single_iteration_scenario(capsys):
    track = generate_track(n_points=30, seed=5)
    n_points = 3

    # replay the first two draws of the optimizer's generator
    rng = np.random.default_rng(42)
    initial = random_candidate(n_points, track, rng)
    neighbour = initial.neighbour()
    if path_length_score(neighbour.task) > path_length_score(initial.task):
        expected = neighbour.task
    else:
        expected = initial.task

    opt = SimAnnealingOptimizer(10.0, 9.0, 0.5, 42)
    task = opt.optimize(track, n_points, path_length_score)

    assert task == expected
    assert opt.last_result.iterations == 1
    assert len(opt.last_result.run_log) == 2

    dumped = json.loads(capsys.readouterr().out)
    assert set(dumped) == {"Candidates", "Bests", "Temperature"}
    assert dumped["Temperature"] == [0.0, 5.0]
    assert dumped["Candidates"][0] is None
    assert dumped["Bests"][1]["indices"] == list(expected.indices)


def test_run_log_can_drop_placeholder():
    result = _optimizer(10.0, 9.0, 0.5, log_placeholder=False).run(None, 1, _identity)
    assert len(result.run_log) == 1
    assert result.run_log.rows[0][0] is not None


def test_run_log_dump_is_silent_when_disabled(capsys):
    _optimizer(10.0, 9.0, 0.5).optimize(None, 1, _identity)
    assert capsys.readouterr().out == ""


def test_lax_mode_start_below_floor_returns_initial_task():
    opt = _optimizer(1.0, 5.0, 0.5, seed=11, strict=False)
    result = opt.run(None, 1, _identity)

    initial = _walk_factory(1, None, np.random.default_rng(11)).task
    assert result.iterations == 0
    assert result.best_task == initial
    assert len(result.run_log) == 1


@pytest.mark.parametrize("alpha", [1.0, 1.5])
def test_lax_mode_large_alpha_terminates(alpha):
    result = _optimizer(10.0, 1.0, alpha, strict=False).run(None, 1, _identity)
    assert result.iterations == 1
    assert result.run_log.temperatures[-1] <= 0.0


@pytest.mark.parametrize("start,alpha", [(10.0, 1.0), (-0.5, 0.5)])
def test_lax_mode_negative_floor_fails_cleanly(start, alpha):
    opt = _optimizer(start, -1.0, alpha, strict=False)
    with pytest.raises(InvalidParameters):
        opt.run(None, 1, _identity)


@pytest.mark.parametrize(
    "start,stop,alpha",
    [
        (0.0, 1.0, 0.1),
        (10.0, 0.0, 0.1),
        (10.0, -1.0, 0.1),
        (1.0, 1.0, 0.1),
        (1.0, 10.0, 0.1),
        (10.0, 1.0, 0.0),
        (10.0, 1.0, 1.0),
        (10.0, 1.0, -0.2),
    ],
)
def test_invalid_schedule_rejected(start, stop, alpha):
    with pytest.raises(InvalidParameters):
        SimAnnealingOptimizer(start, stop, alpha, 0)


def test_invalid_parameters_is_value_error():
    with pytest.raises(ValueError):
        SimAnnealingOptimizer(10.0, 1.0, 2.0, 0)


def test_unknown_acceptance_rule_rejected():
    with pytest.raises(InvalidParameters):
        SimAnnealingOptimizer(10.0, 1.0, 0.1, 0, acceptance="greedy")


def test_non_positive_n_points_rejected():
    with pytest.raises(InvalidParameters):
        _optimizer(10.0, 1.0, 0.1).run(None, 0, _identity)


def test_failing_score_aborts_run():
    def boom(task):
        raise ZeroDivisionError("bad task")

    with pytest.raises(DegenerateCandidate) as info:
        _optimizer(10.0, 1.0, 0.1).run(None, 1, boom)
    assert isinstance(info.value.__cause__, ZeroDivisionError)


def test_non_finite_score_aborts_run():
    calls = []

    def flaky(task):
        calls.append(task)
        return math.nan if len(calls) > 3 else float(task)

    with pytest.raises(DegenerateCandidate):
        _optimizer(100.0, 1.0, 0.1).run(None, 1, flaky)
    assert len(calls) == 4


def test_failing_neighbour_aborts_run():
    class _Stuck:
        task = 1

        def neighbour(self):
            raise RuntimeError("no move")

    opt = _optimizer(10.0, 1.0, 0.1, candidate_factory=lambda n, t, rng: _Stuck())
    with pytest.raises(DegenerateCandidate) as info:
        opt.run(None, 1, _identity)
    assert isinstance(info.value.__cause__, RuntimeError)


def test_oversized_candidate_request_is_degenerate():
    track = generate_track(n_points=3, seed=0)
    opt = SimAnnealingOptimizer(10.0, 1.0, 0.1, 0, emit_run_log=False)
    with pytest.raises(DegenerateCandidate):
        opt.optimize(track, 5, path_length_score)


def test_metropolis_rule_climbs_towards_higher_scores():
    rng = np.random.default_rng(0)
    result = run_annealing(
        None,
        1,
        _identity,
        rng,
        start_temperature=5.0,
        min_temperature=0.01,
        alpha=0.01,
        candidate_factory=_walk_factory,
        acceptance="metropolis",
    )
    assert result.last_task > 100
    assert result.best_score >= result.last_task


def test_linear_rule_keeps_moving_to_worse_candidates():
    rng = np.random.default_rng(0)
    result = run_annealing(
        None,
        1,
        _identity,
        rng,
        start_temperature=5.0,
        min_temperature=0.01,
        alpha=0.01,
        candidate_factory=_walk_factory,
    )
    assert result.last_task < 0


def test_default_optimizer_schedule():
    opt = new_sim_annealing_optimizer(emit_run_log=False)
    assert opt.start_temperature == 1000.0
    assert opt.min_temperature == 1.0
    assert opt.alpha == 0.003
    assert opt.seed > 0


def test_consecutive_runs_reset_state():
    opt = _optimizer(10.0, 1.0, 0.2, seed=9)
    first = opt.run(None, 1, _identity)
    second = opt.run(None, 1, _identity)
    assert first.iterations == second.iterations == expected_iterations(10.0, 1.0, 0.2)
