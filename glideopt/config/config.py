# Run settings consumed by SimAnnealingOptimizer.from_params; config files override via "params"
DEFAULTS = {
    "start_temperature": 1000.0,
    "min_temperature": 1.0,
    "alpha": 0.003,           # fraction of temperature removed per iteration
    "seed": None,             # None -> seeded from time.time_ns()
    "n_points": 5,            # points per candidate
    "acceptance": "linear",   # "linear" | "metropolis"
    "strict": True,           # reject ill-formed temperature/alpha settings
    "emit_run_log": True,     # dump run log JSON to stdout after each run
    "log_placeholder": True,  # keep the empty leading run log entry
    "score": "path_length",
}
