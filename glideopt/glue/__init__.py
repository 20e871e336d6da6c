"""Glue helpers exposed for CLI and integration harnesses."""

from .io import load_config, load_track, save_task_json, validate_track
from .pipeline import (
    assemble_track,
    build_arg_parser,
    build_params,
    load_and_run,
    main,
    run_pipeline,
)

__all__ = [
    "assemble_track",
    "build_arg_parser",
    "build_params",
    "load_and_run",
    "load_config",
    "load_track",
    "main",
    "run_pipeline",
    "save_task_json",
    "validate_track",
]
