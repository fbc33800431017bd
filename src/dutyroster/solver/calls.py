"""
Call Assignment Pass
====================
Assigns Day/Night/Weekend call (and junior backup) day by day.

Day shapes:
    weekend/holiday   top candidate takes Weekend Call
    weekday           night pool supplies Night Call, best remaining takes Day Call
    weekday, no night pool
                      top candidate takes a fused 24h Day+Night call

A PGY-1 without solo clearance holding Day or Weekend call gets the
highest-ranked eligible backup-capable senior as Backup.
"""
from typing import Dict, List, Optional, Sequence

from dutyroster.models.activity import Activity
from dutyroster.models.config import RosterConfig
from dutyroster.models.diagnostics import DiagnosticKind, Diagnostics
from dutyroster.models.person import Resident
from dutyroster.models.rules import RULES, ScoringRules
from dutyroster.models.schedule import ScheduleGrid
from dutyroster.solver.normalize import NormalizedInput
from dutyroster.solver.scoring import (
    call_quota,
    can_back_up,
    is_call_eligible,
    is_night_pool,
    priority_score,
    rank_candidates,
)
from dutyroster.utils.logging_setup import get_logger, log_function_call

logger = get_logger("dutyroster.solver.calls")

FUSED_24H = {Activity.DAY_CALL, Activity.NIGHT_CALL}


class CallAssigner:
    """Greedy call assignment over one grid."""

    def __init__(
        self,
        grid: ScheduleGrid,
        period: NormalizedInput,
        config: RosterConfig,
        diagnostics: Diagnostics,
        rules: ScoringRules = RULES,
    ):
        self.grid = grid
        self.period = period
        self.config = config
        self.diagnostics = diagnostics
        self.rules = rules
        self.quotas: Dict[int, Optional[int]] = {
            p: call_quota(person, period.num_days, config.call_rules)
            for p, person in grid.residents()
        }

    def eligible(self, day: int) -> List[int]:
        """Eligible residents for ``day``, best first."""
        weekend = self.period.is_weekend_or_holiday(day)
        candidates = [
            p for p, _ in self.grid.residents()
            if is_call_eligible(self.grid, p, day, self.quotas[p], weekend, self.rules)
        ]
        ranked = rank_candidates(self.grid, candidates, day, self.rules)
        logger.debug(
            f"Day {day + 1} candidates: "
            + ", ".join(
                f"{self.grid.people[p].id}={priority_score(self.grid.people[p], day, self.grid.ledgers[p], self.rules)}"
                for p in ranked
            )
        )
        return ranked

    def assign_day(self, day: int):
        """Fill the call slots of a single day."""
        ranked = self.eligible(day)

        if self.period.is_weekend_or_holiday(day):
            if not ranked:
                self._unfilled(day, "Weekend Call")
                return
            primary = ranked[0]
            self._book(primary, day, Activity.WEEKEND_CALL)
            self._cover(primary, day, [ranked[1:]])
            return

        night_pool = [p for p in ranked if is_night_pool(self.grid.people[p])]
        if night_pool:
            night = night_pool[0]
            self._book(night, day, Activity.NIGHT_CALL)
            remaining = [p for p in ranked if p != night]
            if not remaining:
                self._unfilled(day, "Day Call")
                return
            primary = remaining[0]
            self._book(primary, day, Activity.DAY_CALL)
            self._cover(primary, day, [remaining[1:], night_pool[1:]])
            return

        if not ranked:
            self._unfilled(day, "Day and Night Call")
            return
        primary = ranked[0]
        logger.debug(f"Day {day + 1}: no night pool, 24h call for {self.grid.people[primary].id}")
        self._book(primary, day, Activity.DAY_CALL, Activity.NIGHT_CALL)
        self._cover(primary, day, [ranked[1:]])

    def _book(self, p: int, day: int, *activities: Activity):
        for activity in activities:
            self.grid.stamp(p, day, activity)
        self.grid.record_call(
            p, day,
            weekend=self.period.is_weekend_or_holiday(day),
            double_call=day in self.period.double_call_days,
        )
        logger.debug(
            f"Day {day + 1}: {'+'.join(a.value for a in activities)} → {self.grid.people[p].id}"
        )

    def _cover(self, primary: int, day: int, pools: Sequence[Sequence[int]]):
        """Give a non-solo PGY-1 a senior backup, searching pools in order."""
        person = self.grid.people[primary]
        if not person.needs_backup:
            return
        for pool in pools:
            for p in pool:
                if p == primary or self.grid.is_occupied(p, day):
                    continue
                if can_back_up(self.grid.people[p], self.rules):
                    self.grid.stamp(p, day, Activity.BACKUP)
                    logger.debug(f"Day {day + 1}: Backup → {self.grid.people[p].id}")
                    return
        self.diagnostics.add(
            DiagnosticKind.NO_BACKUP,
            f"No backup found for {person.name or person.id} on day {day + 1}.",
            person_id=person.id,
            day_index=day,
        )

    def _unfilled(self, day: int, role: str):
        self.diagnostics.add(
            DiagnosticKind.NO_ELIGIBLE_RESIDENT,
            f"No eligible resident for {role} on day {day + 1} ({self.period.dates[day].isoformat()}).",
            day_index=day,
        )


def apply_predefined_calls(
    grid: ScheduleGrid,
    period: NormalizedInput,
    config: RosterConfig,
    diagnostics: Diagnostics,
) -> ScheduleGrid:
    """
    Stamp a fixed call table without any eligibility logic.

    Entries that cannot be stamped cleanly are skipped with a diagnostic.
    A second call kind in the same cell is accepted only when it completes
    a 24h Day+Night call. No backups are assigned in this mode, so every
    PGY-1 Day/Weekend call nobody backs up is reported.
    """
    for entry in config.predefined_calls:
        p = grid.index_of(entry.person_id)
        if p is None or not isinstance(grid.people[p], Resident):
            diagnostics.add(
                DiagnosticKind.PREDEFINED_CALL,
                f"Predefined call on day {entry.day} names unknown resident {entry.person_id}; skipped.",
                person_id=entry.person_id,
            )
            continue
        if not 1 <= entry.day <= period.num_days:
            diagnostics.add(
                DiagnosticKind.PREDEFINED_CALL,
                f"Predefined call for {entry.person_id} on day {entry.day} is outside the period; skipped.",
                person_id=entry.person_id,
            )
            continue

        day = entry.day - 1
        activity = entry.call.activity
        name = grid.people[p].name or entry.person_id
        if grid.is_absent(p, day):
            diagnostics.add(
                DiagnosticKind.PREDEFINED_CALL,
                f"Predefined {activity.value} for {name} on day {entry.day} falls on leave; skipped.",
                person_id=entry.person_id,
                day_index=day,
            )
            continue
        if activity in grid.cell(p, day):
            continue
        held = [a for a in grid.cell(p, day) if a.is_call]
        if held and {activity, *held} != FUSED_24H:
            diagnostics.add(
                DiagnosticKind.PREDEFINED_CALL,
                f"Predefined {activity.value} for {name} on day {entry.day} clashes with "
                f"{', '.join(a.value for a in held)}; skipped.",
                person_id=entry.person_id,
                day_index=day,
            )
            continue

        grid.stamp(p, day, activity)
        grid.record_call(
            p, day,
            weekend=period.is_weekend_or_holiday(day),
            double_call=day in period.double_call_days,
        )

    report_uncovered_juniors(grid, diagnostics)
    return grid


def report_uncovered_juniors(grid: ScheduleGrid, diagnostics: Diagnostics):
    """NO_BACKUP for every Day/Weekend call of a non-solo PGY-1 that nobody backs up."""
    for p, person in grid.residents():
        if not person.needs_backup:
            continue
        for day in range(grid.num_days):
            if not grid.has(p, day, Activity.DAY_CALL, Activity.WEEKEND_CALL):
                continue
            if any(grid.has(q, day, Activity.BACKUP) for q in range(grid.num_people) if q != p):
                continue
            diagnostics.add(
                DiagnosticKind.NO_BACKUP,
                f"No backup found for {person.name or person.id} on day {day + 1}.",
                person_id=person.id,
                day_index=day,
            )


@log_function_call
def run_call_pass(
    grid: ScheduleGrid,
    period: NormalizedInput,
    config: RosterConfig,
    diagnostics: Diagnostics,
    rules: ScoringRules = RULES,
) -> ScheduleGrid:
    """Assign call from the predefined table or algorithmically."""
    if config.use_predefined_call:
        logger.info(f"Applying {len(config.predefined_calls)} predefined call entries")
        return apply_predefined_calls(grid, period, config, diagnostics)

    assigner = CallAssigner(grid, period, config, diagnostics, rules)
    for day in range(period.num_days):
        assigner.assign_day(day)

    booked = sum(ledger.call_count for ledger in grid.ledgers)
    logger.info(f"Booked {booked} call days over {period.num_days} days")
    return grid
