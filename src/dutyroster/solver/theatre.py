"""
OR and Clinic Assignment Pass
=============================
Fills open weekday cells with operating-room and clinic duty.

Per weekday, in order:
    1. chiefs claim an OR case on their pre-selected chief days
    2. clinic slots go to open on-service residents, most junior first
    3. remaining OR cases go to open on-service residents, most senior first,
       fewest OR days first among equals; complex cases need a PGY-4+ and
       pick first
"""
from typing import Dict, List, Optional, Sequence

from dutyroster.models.activity import WEEKEND_WEEKDAYS, Activity
from dutyroster.models.config import OrCase, RosterConfig
from dutyroster.models.person import NeuroResident
from dutyroster.models.rules import RULES, ScoringRules
from dutyroster.models.schedule import ScheduleGrid
from dutyroster.solver.normalize import NormalizedInput
from dutyroster.utils.logging_setup import get_logger, log_function_call

logger = get_logger("dutyroster.solver.theatre")


def infer_clinic_team(cases: Sequence[OrCase], staff_teams: Dict[str, List[str]]) -> Optional[str]:
    """Team whose staff list contains the surgeon of the day's first case."""
    if not cases:
        return None
    surgeon = cases[0].surgeon.strip().lower()
    for team, names in staff_teams.items():
        if surgeon in (n.strip().lower() for n in names):
            return team
    return None


def clinic_quota_for_day(
    weekday_name: str,
    cases: Sequence[OrCase],
    config: RosterConfig,
) -> int:
    """
    Clinic slots for a day.

    Falls back to the first team listed for the weekday when the day's team
    cannot be inferred from its first OR case.
    """
    quotas = config.clinic_quotas.get(weekday_name, {})
    if not quotas:
        return 0
    team = infer_clinic_team(cases, config.staff_teams)
    if team not in quotas:
        team = next(iter(quotas))
    return int(quotas[team])


def _open_on_service(grid: ScheduleGrid, day: int) -> List[int]:
    return [
        p for p, person in grid.residents()
        if isinstance(person, NeuroResident) and person.on_service and not grid.is_occupied(p, day)
    ]


def assign_chief_or(grid: ScheduleGrid, day: int) -> int:
    """Chiefs with ``day`` among their chief OR days take a case if free."""
    claimed = 0
    for p, person in grid.residents():
        if not (isinstance(person, NeuroResident) and person.is_chief):
            continue
        if day + 1 in person.chief_or_days and not grid.is_occupied(p, day):
            grid.stamp(p, day, Activity.OR)
            grid.record_or(p, day)
            claimed += 1
    return claimed


def assign_clinic(grid: ScheduleGrid, day: int, slots: int) -> int:
    """Offer ``slots`` clinic places to open residents, most junior first."""
    candidates = sorted(_open_on_service(grid, day), key=lambda p: grid.people[p].level)
    chosen = candidates[:max(slots, 0)]
    for p in chosen:
        grid.stamp(p, day, Activity.CLINIC)
    return len(chosen)


def unclaimed_cases(cases: Sequence[OrCase], claimed: int) -> List[OrCase]:
    """Cases left once chiefs have taken ``claimed`` of them, complex ones first."""
    ranked = sorted(range(len(cases)), key=lambda i: not cases[i].is_complex)
    taken = set(ranked[:claimed])
    return [case for i, case in enumerate(cases) if i not in taken]


def assign_or(
    grid: ScheduleGrid,
    day: int,
    cases: Sequence[OrCase],
    rules: ScoringRules = RULES,
) -> int:
    """
    Staff one resident per case, most senior first, spreading OR days.

    Complex cases pick first and take the best-placed resident at
    ``complex_case_min_level`` or above. A complex case with no such senior
    open is staffed like a routine one. Case teams are recorded in case order.
    """
    candidates = sorted(
        _open_on_service(grid, day),
        key=lambda p: (-grid.people[p].level, grid.ledgers[p].or_days),
    )
    staff: List[Optional[int]] = [None] * len(cases)
    for i, case in enumerate(cases):
        if not case.is_complex:
            continue
        senior = next(
            (p for p in candidates if grid.people[p].level >= rules.complex_case_min_level),
            None,
        )
        if senior is None:
            logger.debug(
                f"Day {day + 1}: no PGY{rules.complex_case_min_level}+ open for complex case "
                f"{case.procedure or case.surgeon}"
            )
            continue
        candidates.remove(senior)
        staff[i] = senior

    for i in range(len(cases)):
        if staff[i] is None and candidates:
            staff[i] = candidates.pop(0)

    staffed = [p for p in staff if p is not None]
    for p in staffed:
        grid.stamp(p, day, Activity.OR)
        grid.record_or(p, day)
    return len(staffed)


@log_function_call
def run_theatre_pass(
    grid: ScheduleGrid,
    period: NormalizedInput,
    config: RosterConfig,
    rules: ScoringRules = RULES,
) -> ScheduleGrid:
    """
    Chief OR, clinic, then OR for every weekday of the period.

    Cases claimed by chiefs count against the complex cases first.
    """
    totals = {"chief": 0, "clinic": 0, "or": 0}

    for day in range(period.num_days):
        if period.dates[day].weekday() in WEEKEND_WEEKDAYS:
            continue

        cases = config.or_cases.get(day + 1, [])
        totals["chief"] += assign_chief_or(grid, day)

        slots = clinic_quota_for_day(period.weekday_name(day), cases, config)
        totals["clinic"] += assign_clinic(grid, day, slots)

        open_cases = unclaimed_cases(cases, len(grid.theatre.get(day, [])))
        demand = len(open_cases)
        staffed = assign_or(grid, day, open_cases, rules)
        totals["or"] += staffed
        if staffed < demand:
            logger.debug(f"Day {day + 1}: {demand - staffed} OR case(s) left without a resident")

    logger.info(
        f"Theatre pass: {totals['chief']} chief OR, {totals['clinic']} clinic, {totals['or']} OR assignments"
    )
    return grid
