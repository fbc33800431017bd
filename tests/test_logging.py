"""Tests for logging infrastructure."""
import logging

import pytest

from conftest import make_grid
from dutyroster import generate_schedule
from dutyroster.models.activity import Activity
from dutyroster.models.diagnostics import DiagnosticKind, Diagnostics
from dutyroster.solver.fallback import run_fallback_pass
from dutyroster.utils.logging_setup import (
    TRACE,
    SolverLogger,
    get_logger,
    log_constraint,
    log_function_call,
)


def test_trace_level_registered():
    assert TRACE == 5
    assert logging.getLevelName(TRACE) == "TRACE"


def test_module_loggers_live_under_package():
    assert get_logger("dutyroster.solver.calls").name == "dutyroster.solver.calls"


class TestLogFunctionCall:
    """Pass tracing decorator."""

    def test_traces_grid_occupancy(self, caplog, pgy4):
        grid, _ = make_grid([pgy4], 3)
        grid.stamp(0, 0, Activity.OR)

        with caplog.at_level(TRACE, logger="dutyroster.solver.fallback"):
            run_fallback_pass(grid)

        assert "→ run_fallback_pass(ScheduleGrid(people=1, days=3) [1/3 cells filled])" in caplog.text
        assert "← run_fallback_pass: ScheduleGrid(people=1, days=3) [3/3 cells filled]" in caplog.text

    def test_plain_values_use_repr(self, caplog):
        @log_function_call
        def add(a, b):
            return a + b

        with caplog.at_level(TRACE):
            assert add(1, 2) == 3
        assert "→ add(1, 2)" in caplog.text
        assert "← add: 3" in caplog.text

    def test_silent_above_trace(self, caplog):
        @log_function_call
        def noop():
            return None

        with caplog.at_level(logging.DEBUG):
            noop()
        assert caplog.text == ""

    def test_reraises_and_logs_errors(self, caplog):
        @log_function_call
        def fail():
            raise ValueError("bad period")

        with caplog.at_level(logging.ERROR), pytest.raises(ValueError):
            fail()
        assert "ValueError: bad period" in caplog.text

    def test_keeps_metadata(self):
        @log_function_call
        def run_pass():
            """Docstring."""

        assert run_pass.__name__ == "run_pass"
        assert run_pass.__doc__ == "Docstring."


class TestConstraintLogging:
    """log_constraint and SolverLogger output."""

    @pytest.mark.parametrize("satisfied, mark, level", [(True, "✓", logging.DEBUG), (False, "✗", logging.WARNING)])
    def test_log_constraint(self, caplog, satisfied, mark, level):
        with caplog.at_level(logging.DEBUG):
            log_constraint(logging.getLogger("test"), "day 1 staffing", satisfied, "2 available")
        record = caplog.records[-1]
        assert record.levelno == level
        assert record.getMessage() == f"[{mark}] day 1 staffing: 2 available"

    def test_steps_are_numbered_per_run(self, caplog):
        slog = SolverLogger("test.solver")
        with caplog.at_level(logging.INFO):
            slog.phase("Roster generation")
            slog.step("Pre-assigning leave")
            slog.step("Assigning call")
            slog.phase("Roster generation")
            slog.step("Pre-assigning leave")

        messages = [r.getMessage() for r in caplog.records]
        assert "[2] Assigning call" in messages
        assert messages.count("[1] Pre-assigning leave") == 2

    def test_outcome_tallies_kinds(self, caplog):
        diags = Diagnostics()
        diags.add(DiagnosticKind.NO_BACKUP, "a")
        diags.add(DiagnosticKind.NO_BACKUP, "b")
        diags.add(DiagnosticKind.COVERAGE, "c")
        slog = SolverLogger("test.solver")

        with caplog.at_level(logging.DEBUG, logger="test.solver"):
            slog.outcome(diags)
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "[✗] all slots filled: diagnostics: coverage=1, no_backup=2"

    def test_clean_outcome(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="test.solver"):
            SolverLogger("test.solver").outcome(Diagnostics())
        assert caplog.records[-1].getMessage() == "[✓] all slots filled: diagnostics: none"


def test_diagnostics_logged_as_warnings(caplog, small_team, week_config):
    with caplog.at_level(logging.WARNING, logger="dutyroster"):
        generate_schedule(small_team, week_config)
    assert "[no_backup] No backup found for Sofia Khan on day 3." in caplog.text
