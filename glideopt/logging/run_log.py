import csv
import json
import math
import sys


def _describe(candidate):
    if candidate is None:
        return None
    task = getattr(candidate, "task", candidate)
    to_dict = getattr(task, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return repr(task)


def _num(value):
    if value is None:
        return None
    value = float(value)
    return value if math.isfinite(value) else None


class RunLog:
    """Per-iteration snapshots of an annealing run.

    Each row is ``(candidate, best, temp, curr_score, best_score)``. With
    ``placeholder=True`` the log opens with an empty row (no candidate, no
    best, temperature ``0.0``), so a run of ``k`` iterations holds ``k + 1``
    rows.
    """

    def __init__(self, placeholder=True):
        self.rows = []
        if placeholder:
            self.rows.append((None, None, 0.0, None, None))

    def __len__(self):
        return len(self.rows)

    def append(self, candidate, best, temp, curr_score=None, best_score=None):
        self.rows.append((candidate, best, float(temp), curr_score, best_score))

    @property
    def temperatures(self):
        return [row[2] for row in self.rows]

    @property
    def best_scores(self):
        return [row[4] for row in self.rows]

    def to_dict(self):
        return {
            "Candidates": [_describe(row[0]) for row in self.rows],
            "Bests": [_describe(row[1]) for row in self.rows],
            "Temperature": [row[2] for row in self.rows],
        }

    def dumps(self):
        return json.dumps(self.to_dict(), indent=2)

    def emit(self, stream=None):
        """Write the indented JSON dump followed by a newline."""
        stream = sys.stdout if stream is None else stream
        stream.write(self.dumps())
        stream.write("\n")

    def save_json(self, path):
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    def save_csv(self, path):
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["iter", "temp", "curr_score", "best_score", "curr_task", "best_task"])
            for it, (cand, best, temp, curr_score, best_score) in enumerate(self.rows):
                curr_task = _describe(cand)
                best_task = _describe(best)
                w.writerow(
                    [
                        it,
                        temp,
                        _num(curr_score),
                        _num(best_score),
                        json.dumps(curr_task) if curr_task is not None else "",
                        json.dumps(best_task) if best_task is not None else "",
                    ]
                )


def save_best_json(path, result, params, *, extra=None):
    data = {
        "best_score": float(result.best_score),
        "best_task": _describe(result.best_task),
        "iterations": int(result.iterations),
        "accepted": int(result.accepted),
        "improved_best": int(result.improved_best),
        "rows_logged": len(result.run_log),
        "params": params,
    }
    if extra:
        data.update(extra)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
