"""
Roster Validation
=================
Re-checks a finished roster against its invariants. Every breach must be
either absent or explained by a diagnostic the engine emitted.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from dutyroster.models.activity import EXCLUSIVE_ACTIVITIES, Activity
from dutyroster.models.config import RosterConfig
from dutyroster.models.diagnostics import DiagnosticKind
from dutyroster.models.person import Resident
from dutyroster.models.schedule import AssignedRoster
from dutyroster.solver.scoring import call_quota
from dutyroster.utils.logging_setup import get_logger

logger = get_logger("dutyroster.solver.validation")

FUSED_24H = {Activity.DAY_CALL, Activity.NIGHT_CALL}


@dataclass
class Violation:
    """Single violation with details."""
    type: str  # "double_booking", "post_call_missing", "quota_exceeded", "backup_missing"
    person_id: str
    day: int  # 1-indexed
    message: str


@dataclass
class ValidationResult:
    """Invariant breach counts for a roster."""
    double_bookings: int = 0
    post_call_gaps: int = 0
    quota_breaches: int = 0
    missing_backups: int = 0
    violations: List[Violation] = field(default_factory=list)

    def add_violation(self, v: Violation):
        self.violations.append(v)
        logger.debug(f"Violation [{v.type}] {v.message}")

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def as_dict(self) -> Dict[str, int]:
        return {
            "double_bookings": self.double_bookings,
            "post_call_gaps": self.post_call_gaps,
            "quota_breaches": self.quota_breaches,
            "missing_backups": self.missing_backups,
        }


def _labels(cell: List[str]) -> Set[Activity]:
    return {Activity(label) for label in cell}


def validate_roster(roster: AssignedRoster, config: Optional[RosterConfig] = None) -> ValidationResult:
    """
    Check no-double-booking, post-call, backup and (with a config) quota
    invariants.

    Args:
        roster: Output of generate_schedule
        config: The config the roster was built from; enables the quota check

    Returns:
        ValidationResult with counts and the detailed violations
    """
    result = ValidationResult()
    num_days = len(roster.dates)

    explained: Dict[DiagnosticKind, Set[Tuple[Optional[str], Optional[int]]]] = {}
    for diag in roster.diagnostics:
        explained.setdefault(diag.kind, set()).add((diag.person_id, diag.day_index))

    # 1. No two exclusive labels in one cell, except the 24h Day+Night fusion
    for row in roster.rows:
        for d, cell in enumerate(row.schedule):
            exclusive = _labels(cell) & EXCLUSIVE_ACTIVITIES
            if len(exclusive) > 1 and exclusive != FUSED_24H:
                result.double_bookings += 1
                result.add_violation(Violation(
                    type="double_booking", person_id=row.id, day=d + 1,
                    message=f"{row.id} day {d + 1}: {', '.join(sorted(a.value for a in exclusive))}",
                ))

    # 2. Night/weekend call is followed by rest (or leave, or a reported conflict)
    conflicts = explained.get(DiagnosticKind.POST_CALL_CONFLICT, set())
    for row in roster.rows:
        for d in range(num_days - 1):
            if not _labels(row.schedule[d]) & {Activity.NIGHT_CALL, Activity.WEEKEND_CALL}:
                continue
            nxt = _labels(row.schedule[d + 1])
            if Activity.POST_CALL in nxt or any(a.is_absence for a in nxt):
                continue
            if (row.id, d + 1) in conflicts:
                continue
            result.post_call_gaps += 1
            result.add_violation(Violation(
                type="post_call_missing", person_id=row.id, day=d + 2,
                message=f"{row.id} has no post-call on day {d + 2}",
            ))

    # 3. Non-solo PGY-1 on Day/Weekend call has a senior backup (or a diagnostic)
    no_backup = explained.get(DiagnosticKind.NO_BACKUP, set())
    for row in roster.rows:
        person = row.person
        if not (isinstance(person, Resident) and person.needs_backup):
            continue
        for d, cell in enumerate(row.schedule):
            if not _labels(cell) & {Activity.DAY_CALL, Activity.WEEKEND_CALL}:
                continue
            covered = any(
                Activity.BACKUP.value in other.schedule[d]
                and isinstance(other.person, Resident)
                and other.person.level >= 3
                for other in roster.rows
                if other.id != row.id
            )
            if covered or (row.id, d) in no_backup:
                continue
            result.missing_backups += 1
            result.add_violation(Violation(
                type="backup_missing", person_id=row.id, day=d + 1,
                message=f"{row.id} on call day {d + 1} without backup",
            ))

    # 4. Call counts stay within quota
    if config is not None:
        for row in roster.rows:
            if not isinstance(row.person, Resident):
                continue
            quota = call_quota(row.person, num_days, config.call_rules)
            if quota is not None and row.ledger.call_count > quota:
                result.quota_breaches += 1
                result.add_violation(Violation(
                    type="quota_exceeded", person_id=row.id, day=row.ledger.call_days[-1] + 1,
                    message=f"{row.id} has {row.ledger.call_count} calls, quota {quota}",
                ))

    logger.info(f"Validation: {len(result.violations)} violations {result.as_dict()}")
    return result
