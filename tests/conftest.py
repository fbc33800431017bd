"""Pytest configuration and fixtures."""
import sys
from datetime import date, timedelta
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from dutyroster.models.config import RosterConfig
from dutyroster.models.person import NeuroResident, NonNeuroResident
from dutyroster.models.schedule import ScheduleGrid
from dutyroster.solver.normalize import NormalizedInput

MONDAY = date(2024, 1, 1)


def make_grid(people, days, start=MONDAY, stat_holidays=(), double_call_days=()):
    """Fresh grid plus matching period for pass-level tests."""
    dates = [start + timedelta(days=i) for i in range(days)]
    period = NormalizedInput(
        dates=dates,
        stat_holidays=frozenset(stat_holidays),
        double_call_days=frozenset(double_call_days),
    )
    return ScheduleGrid(people, dates), period


@pytest.fixture
def pgy1():
    return NeuroResident(id="r1", name="Sofia Khan", level=1)


@pytest.fixture
def pgy4():
    return NeuroResident(id="r4", name="Ben Carter", level=4)


@pytest.fixture
def pgy5():
    return NeuroResident(id="r5", name="Olivia Chen", level=5)


@pytest.fixture
def exempt_non_neuro():
    return NonNeuroResident(id="nn", name="Sam Jones", specialty="Plastics", level=2, exempt_from_call=True)


@pytest.fixture
def small_team(pgy1, pgy4, exempt_non_neuro):
    """One PGY-1, one PGY-4 and an exempt non-neuro resident."""
    return [pgy1, pgy4, exempt_non_neuro]


@pytest.fixture
def week_config():
    """Monday to Friday, no holidays, no demand."""
    return RosterConfig(start_date="2024-01-01", end_date="2024-01-05")
