"""Utilities package for the duty roster engine."""
from .logging_setup import (
    TRACE,
    SolverLogger,
    get_logger,
    log_constraint,
    log_function_call,
)

__all__ = [
    "get_logger",
    "log_function_call",
    "log_constraint",
    "SolverLogger",
    "TRACE",
]
