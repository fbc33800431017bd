"""Post-call pass: mandatory rest after night and weekend call."""
from dutyroster.models.activity import Activity
from dutyroster.models.diagnostics import DiagnosticKind, Diagnostics
from dutyroster.models.schedule import ScheduleGrid
from dutyroster.utils.logging_setup import get_logger, log_function_call

logger = get_logger("dutyroster.solver.post_call")


@log_function_call
def run_post_call_pass(grid: ScheduleGrid, diagnostics: Diagnostics) -> ScheduleGrid:
    """
    Set the day after every Night/Weekend call to Post-Call.

    An empty next day becomes Post-Call. Leave on the next day is fine as is.
    Anything else is a genuine conflict and is reported, never overwritten.
    """
    rest_days = 0
    for p, person in enumerate(grid.people):
        for d in range(grid.num_days - 1):
            if not grid.has(p, d, Activity.NIGHT_CALL, Activity.WEEKEND_CALL):
                continue
            nxt = d + 1
            if not grid.is_occupied(p, nxt):
                grid.replace(p, nxt, Activity.POST_CALL)
                rest_days += 1
            elif not grid.is_absent(p, nxt):
                blocked_by = ", ".join(a.value for a in grid.cell(p, nxt))
                diagnostics.add(
                    DiagnosticKind.POST_CALL_CONFLICT,
                    f"Post-Call for {person.name or person.id} on day {nxt + 1} blocked by {blocked_by}.",
                    person_id=person.id,
                    day_index=nxt,
                )

    logger.info(f"Assigned {rest_days} post-call days")
    return grid
