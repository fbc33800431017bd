"""Pre-assignment pass: stamps leave onto the grid before any call logic."""
from dutyroster.models.activity import Activity
from dutyroster.models.config import RosterConfig
from dutyroster.models.person import Resident
from dutyroster.models.schedule import ScheduleGrid
from dutyroster.solver.normalize import parse_date
from dutyroster.utils.logging_setup import get_logger, log_function_call

logger = get_logger("dutyroster.solver.vacation")


@log_function_call
def run_vacation_pass(grid: ScheduleGrid, config: RosterConfig) -> ScheduleGrid:
    """
    Stamp holiday blocks, then vacations, overwriting whatever is there.

    Vacation is stamped last so it wins where the two overlap. Day numbers
    outside the period are ignored.
    """
    holiday_cells = 0
    vacation_cells = 0

    for p, person in enumerate(grid.people):
        if isinstance(person, Resident):
            block = config.holiday_block(person.holiday_group)
            start = parse_date(block.start) if block else None
            end = parse_date(block.end) if block else None
            if start and end:
                for d, day in enumerate(grid.dates):
                    if start <= day <= end:
                        grid.replace(p, d, Activity.HOLIDAY)
                        holiday_cells += 1

        for day_number in person.vacation_days:
            if 1 <= day_number <= grid.num_days:
                grid.replace(p, day_number - 1, Activity.VACATION)
                vacation_cells += 1

    logger.info(f"Pre-assigned {vacation_cells} vacation and {holiday_cells} holiday cells")
    return grid
