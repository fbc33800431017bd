"""
Roster Engine
=============
Runs the allocation passes in order over one fresh schedule grid:

    normalize → leave → call → (coverage) → post-call → OR/clinic
              → pairing → float

The run is deterministic: identical input gives identical rows and
diagnostics.
"""
import copy
import time
from typing import Any, Dict, Optional, Sequence

from dutyroster.models.config import RosterConfig
from dutyroster.models.diagnostics import Diagnostics
from dutyroster.models.person import Person
from dutyroster.models.rules import RULES, ScoringRules
from dutyroster.models.schedule import AssignedRoster, ScheduleGrid
from dutyroster.models.validated import ValidatedRosterPayload
from dutyroster.solver.calls import run_call_pass
from dutyroster.solver.coverage import run_coverage_check
from dutyroster.solver.fallback import run_fallback_pass
from dutyroster.solver.normalize import normalize_input
from dutyroster.solver.pairing import run_pairing_pass
from dutyroster.solver.post_call import run_post_call_pass
from dutyroster.solver.theatre import run_theatre_pass
from dutyroster.solver.vacation import run_vacation_pass
from dutyroster.utils.logging_setup import SolverLogger

slog = SolverLogger("dutyroster.solver")


def generate_schedule(
    people: Sequence[Person],
    config: Optional[RosterConfig] = None,
    rules: ScoringRules = RULES,
) -> AssignedRoster:
    """
    Build a roster for the configured period.

    Args:
        people: Roster members (any mix of residents and learners)
        config: Period, call rules and OR/clinic demand
        rules: Scoring weights (defaults to RULES)

    Returns:
        AssignedRoster with one row per person and the ordered diagnostics.
        A bad date range yields an empty roster and a single fatal diagnostic.
    """
    config = config or RosterConfig()
    diagnostics = Diagnostics()
    start_time = time.perf_counter()

    slog.phase("Roster generation")
    period = normalize_input(config, diagnostics)
    if period is None:
        return AssignedRoster(diagnostics=list(diagnostics))

    grid = ScheduleGrid(copy.deepcopy(list(people)), period.dates)
    slog.detail("people", grid.num_people)
    slog.detail("days", grid.num_days)

    slog.step("Pre-assigning leave")
    grid = run_vacation_pass(grid, config)

    slog.step("Assigning call")
    grid = run_call_pass(grid, period, config, diagnostics, rules)

    if config.check_service_coverage:
        slog.step("Checking service coverage")
        grid = run_coverage_check(grid, period, config, diagnostics, rules)

    slog.step("Assigning post-call rest")
    grid = run_post_call_pass(grid, diagnostics)

    slog.step("Assigning OR and clinic")
    grid = run_theatre_pass(grid, period, config, rules)

    slog.step("Pairing juniors with seniors")
    grid = run_pairing_pass(grid, rules)

    slog.step("Filling idle days")
    grid = run_fallback_pass(grid)

    slog.outcome(diagnostics)
    slog.detail("elapsed", f"{time.perf_counter() - start_time:.3f}s")
    return AssignedRoster.from_grid(grid, list(diagnostics))


def generate_from_payload(payload: Dict[str, Any], rules: ScoringRules = RULES) -> AssignedRoster:
    """Validate a raw payload, then build the roster."""
    validated = ValidatedRosterPayload.model_validate(payload)
    people, config = validated.to_domain()
    return generate_schedule(people, config, rules)
