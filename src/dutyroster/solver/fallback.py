"""Fallback-fill pass: anything still empty floats."""
from dutyroster.models.activity import Activity
from dutyroster.models.schedule import ScheduleGrid
from dutyroster.utils.logging_setup import get_logger, log_function_call

logger = get_logger("dutyroster.solver.fallback")


@log_function_call
def run_fallback_pass(grid: ScheduleGrid) -> ScheduleGrid:
    """Stamp Float on every empty cell. Never fails."""
    filled = 0
    for p in range(grid.num_people):
        for d in range(grid.num_days):
            if not grid.is_occupied(p, d):
                grid.replace(p, d, Activity.FLOAT)
                filled += 1
    logger.info(f"Marked {filled} cells as Float")
    return grid
