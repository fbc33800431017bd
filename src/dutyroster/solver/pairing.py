"""Junior-senior pairing pass: juniors join seniors operating alone."""
from typing import List, Tuple

from dutyroster.models.activity import Activity
from dutyroster.models.person import NeuroResident
from dutyroster.models.rules import RULES, ScoringRules
from dutyroster.models.schedule import ScheduleGrid
from dutyroster.utils.logging_setup import get_logger, log_function_call

logger = get_logger("dutyroster.solver.pairing")


def seniors_operating_alone(grid: ScheduleGrid, day: int, rules: ScoringRules = RULES) -> List[Tuple[int, List[int]]]:
    """(senior, case team) for every case staffed by a single senior."""
    return [
        (team[0], team)
        for team in grid.theatre.get(day, [])
        if len(team) == 1 and grid.people[team[0]].level >= rules.senior_min_level
    ]


def unassigned_juniors(grid: ScheduleGrid, day: int, rules: ScoringRules = RULES) -> List[int]:
    """Open on-service juniors, most junior first."""
    juniors = [
        p for p, person in grid.residents()
        if isinstance(person, NeuroResident)
        and person.on_service
        and person.level <= rules.junior_max_level
        and not grid.is_occupied(p, day)
    ]
    return sorted(juniors, key=lambda p: grid.people[p].level)


@log_function_call
def run_pairing_pass(grid: ScheduleGrid, rules: ScoringRules = RULES) -> ScheduleGrid:
    """
    Attach open juniors to seniors at least two levels above them.

    The set of lone seniors is taken once per day and not refreshed as
    juniors join, so several juniors can end up with the same senior.
    """
    paired = 0
    for day in sorted(grid.theatre):
        alone = seniors_operating_alone(grid, day, rules)
        if not alone:
            continue
        for junior in unassigned_juniors(grid, day, rules):
            level = grid.people[junior].level
            match = next(
                ((s, team) for s, team in alone if grid.people[s].level - level >= rules.pairing_level_gap),
                None,
            )
            if match is None:
                continue
            senior, team = match
            grid.stamp(junior, day, Activity.OR)
            grid.record_or(junior, day, case_team=team)
            paired += 1
            logger.debug(
                f"Day {day + 1}: {grid.people[junior].id} paired with {grid.people[senior].id}"
            )

    logger.info(f"Paired {paired} juniors with seniors in the OR")
    return grid
