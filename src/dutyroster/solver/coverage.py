"""Service coverage check for Monday to Thursday staffing."""
from dutyroster.models.activity import Activity
from dutyroster.models.config import RosterConfig
from dutyroster.models.diagnostics import DiagnosticKind, Diagnostics
from dutyroster.models.person import NeuroResident
from dutyroster.models.rules import RULES, ScoringRules
from dutyroster.models.schedule import ScheduleGrid
from dutyroster.solver.normalize import NormalizedInput
from dutyroster.utils.logging_setup import get_logger, log_constraint, log_function_call

logger = get_logger("dutyroster.solver.coverage")

CHECKED_WEEKDAYS = (0, 1, 2, 3)  # Monday-Thursday


def available_on_service(grid: ScheduleGrid, day: int):
    """On-service neuro residents not on leave and not coming off call."""
    return [
        p for p, person in grid.residents()
        if isinstance(person, NeuroResident)
        and person.on_service
        and not grid.is_absent(p, day)
        and not grid.has(p, day - 1, Activity.NIGHT_CALL, Activity.WEEKEND_CALL)
    ]


@log_function_call
def run_coverage_check(
    grid: ScheduleGrid,
    period: NormalizedInput,
    config: RosterConfig,
    diagnostics: Diagnostics,
    rules: ScoringRules = RULES,
) -> ScheduleGrid:
    """Report short-staffed days; the grid itself is left untouched."""
    for day in range(period.num_days):
        if period.dates[day].weekday() not in CHECKED_WEEKDAYS:
            continue
        available = available_on_service(grid, day)

        enough = len(available) >= config.min_available_residents
        log_constraint(logger, f"day {day + 1} staffing", enough, f"{len(available)} available")
        if not enough:
            diagnostics.add(
                DiagnosticKind.COVERAGE,
                f"Resident shortage on day {day + 1}: only {len(available)} residents available.",
                day_index=day,
            )

        if not any(grid.people[p].level >= rules.senior_min_level for p in available):
            diagnostics.add(
                DiagnosticKind.COVERAGE,
                f"No senior (PGY{rules.senior_min_level}+) resident available on day {day + 1}.",
                day_index=day,
            )
    return grid
