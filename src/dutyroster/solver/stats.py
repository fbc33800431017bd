"""
Centralized Person Statistics
=============================
Per-person counts of call, OR, clinic and rest for display and export.
"""
from dataclasses import dataclass
from typing import Dict, List

import pandas as pd

from dutyroster.models.activity import Activity
from dutyroster.models.person import Resident
from dutyroster.models.schedule import AssignedRoster
from dutyroster.utils.logging_setup import get_logger

logger = get_logger("dutyroster.solver.stats")


@dataclass
class PersonStats:
    """Statistics for a single person."""
    person_id: str
    name: str
    level: int       # 0 for learners
    calls: int       # distinct call days
    weekend_calls: int
    backups: int
    post_call: int
    or_days: int
    clinic_days: int
    leave_days: int  # vacation + holiday
    float_days: int


def calculate_person_stats(roster: AssignedRoster) -> List[PersonStats]:
    """Calculate statistics for every row of the roster."""
    stats = []
    for row in roster.rows:
        counts: Dict[str, int] = {}
        for cell in row.schedule:
            for label in cell:
                counts[label] = counts.get(label, 0) + 1

        stats.append(PersonStats(
            person_id=row.id,
            name=row.name,
            level=row.person.level if isinstance(row.person, Resident) else 0,
            calls=row.ledger.call_count,
            weekend_calls=row.ledger.weekend_calls,
            backups=counts.get(Activity.BACKUP.value, 0),
            post_call=counts.get(Activity.POST_CALL.value, 0),
            or_days=counts.get(Activity.OR.value, 0),
            clinic_days=counts.get(Activity.CLINIC.value, 0),
            leave_days=counts.get(Activity.VACATION.value, 0) + counts.get(Activity.HOLIDAY.value, 0),
            float_days=counts.get(Activity.FLOAT.value, 0),
        ))

    logger.debug(f"Calculated stats for {len(stats)} people over {len(roster.dates)} days")
    return stats


def stats_to_dict_list(stats: List[PersonStats]) -> List[Dict]:
    """Convert stats to list of dicts for a DataFrame or export."""
    return [
        {
            "Name": s.name or s.person_id,
            "PGY": s.level,
            "Calls": s.calls,
            "Weekend": s.weekend_calls,
            "Backup": s.backups,
            "Post-Call": s.post_call,
            "OR": s.or_days,
            "Clinic": s.clinic_days,
            "Leave": s.leave_days,
            "Float": s.float_days,
        }
        for s in stats
    ]


def stats_to_dataframe(stats: List[PersonStats]) -> pd.DataFrame:
    """Stats table, one row per person."""
    return pd.DataFrame(stats_to_dict_list(stats))
