"""
Call Priority Scoring
=====================
Pure functions deciding who is allowed to take call on a day and in what
order candidates are tried.

Score (higher = picked first):
    +1000               non-neuro resident
    +500                neuro resident rotating off-service
    -100 × calls        calls already booked
    -200 × double-days  calls already taken on double staff-call days
    +(7 - level) × 85   juniors carry more call
    -5000               last call within 3 days (soft, never blocks)
"""
from typing import List, Optional, Sequence

from dutyroster.models.activity import Activity
from dutyroster.models.config import CallRule
from dutyroster.models.person import BasePerson, NeuroResident, NonNeuroResident, Resident
from dutyroster.models.rules import RULES, ScoringRules
from dutyroster.models.schedule import Ledger, ScheduleGrid


def priority_score(person: Resident, day: int, ledger: Ledger, rules: ScoringRules = RULES) -> int:
    """Priority of ``person`` for call on ``day`` given their running ledger."""
    score = 0
    if isinstance(person, NonNeuroResident):
        score += rules.non_neuro_bonus
    elif isinstance(person, NeuroResident) and not person.on_service:
        score += rules.off_rotation_bonus

    score -= ledger.call_count * rules.per_call_penalty
    score -= ledger.double_call_days * rules.double_call_penalty
    score += (rules.seniority_base - person.level) * rules.seniority_weight

    last = ledger.last_call_day
    if last is not None and abs(day - last) <= rules.recency_window_days:
        score -= rules.recency_penalty
    return score


def call_quota(person: Resident, num_days: int, call_rules: Sequence[CallRule]) -> Optional[int]:
    """
    Maximum calls for the period, or None when uncapped.

    On-service neuro residents use the band containing their available days
    (period minus vacation); everyone else uses ``off_service_max_call``.
    A quota of 0, including a band miss, means uncapped.
    """
    if isinstance(person, NeuroResident) and person.on_service:
        vacation = sum(1 for d in person.vacation_days if 1 <= d <= num_days)
        available = num_days - vacation
        band = next((r for r in call_rules if r.contains(available)), None)
        quota = band.max_calls if band else 0
    else:
        quota = person.off_service_max_call
    return quota if quota > 0 else None


def ineligibility_reason(
    grid: ScheduleGrid,
    p: int,
    day: int,
    quota: Optional[int],
    weekend_or_holiday: bool,
    rules: ScoringRules = RULES,
) -> Optional[str]:
    """Why person ``p`` cannot take call on ``day``; None if they can."""
    person = grid.people[p]
    if not isinstance(person, Resident):
        return "not a resident"
    if person.exempt_from_call:
        return "exempt from call"
    if isinstance(person, NeuroResident) and person.is_chief and not person.chief_takes_call:
        return "chief not taking call"
    if grid.is_occupied(p, day):
        return "already assigned"
    if day > 0 and grid.has(p, day - 1, Activity.NIGHT_CALL, Activity.WEEKEND_CALL):
        return "resting after call"

    ledger = grid.ledgers[p]
    if quota is not None and ledger.call_count >= quota:
        return f"call quota reached ({quota})"
    if weekend_or_holiday and ledger.weekend_calls >= rules.max_weekend_calls:
        return f"weekend call limit reached ({rules.max_weekend_calls})"
    return None


def is_call_eligible(
    grid: ScheduleGrid,
    p: int,
    day: int,
    quota: Optional[int],
    weekend_or_holiday: bool,
    rules: ScoringRules = RULES,
) -> bool:
    return ineligibility_reason(grid, p, day, quota, weekend_or_holiday, rules) is None


def is_night_pool(person: BasePerson) -> bool:
    """Weekday night call is kept away from on-service neuro residents."""
    return isinstance(person, Resident) and not (
        isinstance(person, NeuroResident) and person.on_service
    )


def can_back_up(person: BasePerson, rules: ScoringRules = RULES) -> bool:
    """Neuro PGY-4+ may back up; PGY-3 only when flagged."""
    if not isinstance(person, NeuroResident):
        return False
    if person.level >= rules.backup_min_level:
        return True
    return person.level >= rules.senior_min_level and person.can_act_as_backup


def rank_candidates(
    grid: ScheduleGrid,
    candidates: Sequence[int],
    day: int,
    rules: ScoringRules = RULES,
) -> List[int]:
    """Candidates by descending score; ties keep roster order."""
    return sorted(
        candidates,
        key=lambda p: -priority_score(grid.people[p], day, grid.ledgers[p], rules),
    )
