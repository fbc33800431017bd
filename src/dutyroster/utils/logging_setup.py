"""
Duty Roster Logging
===================
Logger tree and pass tracing for the roster engine.

The engine only emits; handlers are the embedding application's business.

Levels:
    TRACE (5): Pass entry/exit with grid occupancy
    DEBUG (10): Candidate rankings, per-cell decisions
    INFO (20): Pass progress, summary counts
    WARNING (30): Diagnostics and failed staffing checks
    ERROR (40): Exceptions escaping a pass
"""
import functools
import logging
from typing import Any, Callable

TRACE = 5
logging.addLevelName(TRACE, "TRACE")


def get_logger(name: str) -> logging.Logger:
    """Logger for an engine module, e.g. ``dutyroster.solver.calls``."""
    return logging.getLogger(name)


def _describe(value: Any) -> str:
    """Short form for trace lines; grids are summarized by occupancy."""
    cells = getattr(value, "cells", None)
    if cells is not None:
        filled = sum(1 for row in cells for cell in row if cell)
        total = sum(len(row) for row in cells)
        return f"{value!r} [{filled}/{total} cells filled]"
    return repr(value)[:60]


def log_function_call(func: Callable) -> Callable:
    """
    Trace a pass at TRACE level.

    Logs the grid occupancy going in and coming out, so a trace shows how
    many cells each pass filled. Exceptions are logged and re-raised.
    """
    logger = logging.getLogger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        name = func.__name__
        if logger.isEnabledFor(TRACE):
            shown = ", ".join(_describe(a) for a in args[:2])
            logger.log(TRACE, f"→ {name}({shown})")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"✖ {name} raised: {type(e).__name__}: {e}")
            raise
        if logger.isEnabledFor(TRACE):
            logger.log(TRACE, f"← {name}: {_describe(result)}")
        return result

    return wrapper


def log_constraint(
    logger: logging.Logger,
    name: str,
    satisfied: bool,
    details: str = "",
    level: int = logging.DEBUG,
):
    """Log a staffing check; failures always go out at WARNING."""
    msg = f"[{'✓' if satisfied else '✗'}] {name}"
    if details:
        msg += f": {details}"
    logger.log(level if satisfied else logging.WARNING, msg)


class SolverLogger:
    """Pass-by-pass progress output for one engine run."""

    def __init__(self, name: str = "dutyroster.solver"):
        self.logger = logging.getLogger(name)
        self.passes = 0

    def phase(self, name: str):
        """Start of a run; resets the pass counter."""
        self.passes = 0
        self.logger.info(f"{'=' * 20} {name} {'=' * 20}")

    def step(self, description: str):
        """One numbered pass."""
        self.passes += 1
        self.logger.info(f"[{self.passes}] {description}")

    def detail(self, key: str, value: Any):
        self.logger.debug(f"    {key}: {value}")

    def constraint(self, name: str, satisfied: bool, details: str = ""):
        log_constraint(self.logger, name, satisfied, details)

    def outcome(self, diagnostics) -> None:
        """Close the run with its diagnostic tally, by kind."""
        counts = {}
        for diag in diagnostics:
            counts[diag.kind.value] = counts.get(diag.kind.value, 0) + 1
        tally = ", ".join(f"{kind}={n}" for kind, n in sorted(counts.items())) or "none"
        self.constraint("all slots filled", not counts, f"diagnostics: {tally}")
