"""
Input Normalizer
================
Turns the raw date range and holiday text into day-indexed lookups.
A missing, unparseable or inverted range is the only fatal condition.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import FrozenSet, List, Optional, Set, Union

from dutyroster.models.activity import WEEKDAY_NAMES, WEEKEND_WEEKDAYS
from dutyroster.models.config import RosterConfig
from dutyroster.models.diagnostics import DiagnosticKind, Diagnostics
from dutyroster.utils.logging_setup import get_logger

logger = get_logger("dutyroster.solver.normalize")


@dataclass(frozen=True)
class NormalizedInput:
    """Day-indexed view of the scheduling period."""
    dates: List[date]
    stat_holidays: FrozenSet[int] = field(default_factory=frozenset)     # 0-based
    double_call_days: FrozenSet[int] = field(default_factory=frozenset)  # 0-based

    @property
    def num_days(self) -> int:
        return len(self.dates)

    def is_weekend(self, d: int) -> bool:
        return self.dates[d].weekday() in WEEKEND_WEEKDAYS

    def is_weekend_or_holiday(self, d: int) -> bool:
        return self.is_weekend(d) or d in self.stat_holidays

    def weekday_name(self, d: int) -> str:
        return WEEKDAY_NAMES[self.dates[d].weekday()]


def parse_date(value: Union[str, date, None]) -> Optional[date]:
    """Parse an ISO date (or pass a date through); None if unusable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def parse_stat_holidays(value: Union[str, List[int], None]) -> Set[int]:
    """
    Parse 1-indexed holiday day numbers.

    Accepts "3, 10, 17" style text (non-numeric tokens are ignored) or a list.
    """
    if not value:
        return set()
    tokens = value.split(",") if isinstance(value, str) else value
    days = set()
    for token in tokens:
        try:
            days.add(int(str(token).strip()))
        except ValueError:
            continue
    return days


def find_double_call_days(config: RosterConfig) -> Set[int]:
    """0-based days where both a cranial and a spine staff are on call."""
    types_by_day = {}
    for call in config.staff_call:
        types_by_day.setdefault(call.day - 1, set()).add(call.call_type)
    return {d for d, types in types_by_day.items() if {"cranial", "spine"} <= types}


def normalize_input(config: RosterConfig, diagnostics: Diagnostics) -> Optional[NormalizedInput]:
    """
    Validate the period and expand it into day indices.

    Returns None after recording a FATAL diagnostic when the range is
    missing, unparseable or inverted.
    """
    start = parse_date(config.start_date)
    end = parse_date(config.end_date)

    if start is None or end is None:
        diagnostics.add(DiagnosticKind.FATAL, "Start and end dates must be set.")
        return None
    if end < start:
        diagnostics.add(DiagnosticKind.FATAL, "End date must be on or after start date.")
        return None

    num_days = (end - start).days + 1
    dates = [start + timedelta(days=i) for i in range(num_days)]

    holidays = frozenset(
        n - 1 for n in parse_stat_holidays(config.stat_holidays) if 1 <= n <= num_days
    )
    double_calls = frozenset(d for d in find_double_call_days(config) if 0 <= d < num_days)

    logger.info(f"Period {start} → {end}: {num_days} days, {len(holidays)} stat holidays")
    return NormalizedInput(dates=dates, stat_holidays=holidays, double_call_days=double_calls)
