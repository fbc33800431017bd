"""Tests for input normalization."""
from datetime import date, datetime

from dutyroster.models.config import RosterConfig, StaffCall
from dutyroster.models.diagnostics import DiagnosticKind, Diagnostics
from dutyroster.solver.normalize import (
    find_double_call_days,
    normalize_input,
    parse_date,
    parse_stat_holidays,
)


class TestParsing:
    """Tests for date and holiday parsing helpers."""

    def test_parse_date(self):
        assert parse_date("2024-01-05") == date(2024, 1, 5)
        assert parse_date("2024-01-05T00:00:00Z") == date(2024, 1, 5)
        assert parse_date(date(2024, 1, 5)) == date(2024, 1, 5)
        assert parse_date(datetime(2024, 1, 5, 13, 30)) == date(2024, 1, 5)

    def test_parse_date_unusable(self):
        assert parse_date(None) is None
        assert parse_date("") is None
        assert parse_date("next tuesday") is None

    def test_parse_stat_holidays_text(self):
        assert parse_stat_holidays("3, 10,x, ,17") == {3, 10, 17}

    def test_parse_stat_holidays_list(self):
        assert parse_stat_holidays([1, "2", 2]) == {1, 2}

    def test_parse_stat_holidays_empty(self):
        assert parse_stat_holidays("") == set()
        assert parse_stat_holidays(None) == set()

    def test_double_call_days(self):
        cfg = RosterConfig(staff_call=[
            StaffCall(day=2, call_type="cranial"),
            StaffCall(day=2, call_type="spine"),
            StaffCall(day=3, call_type="cranial"),
        ])
        assert find_double_call_days(cfg) == {1}


class TestNormalizeInput:
    """Tests for normalize_input."""

    def test_day_count_inclusive(self):
        diags = Diagnostics()
        period = normalize_input(RosterConfig(start_date="2024-01-01", end_date="2024-01-31"), diags)
        assert period.num_days == 31
        assert period.dates[0] == date(2024, 1, 1)
        assert period.dates[-1] == date(2024, 1, 31)
        assert len(diags) == 0

    def test_single_day(self):
        period = normalize_input(RosterConfig(start_date="2024-01-01", end_date="2024-01-01"), Diagnostics())
        assert period.num_days == 1

    def test_missing_dates_fatal(self):
        diags = Diagnostics()
        assert normalize_input(RosterConfig(start_date="2024-01-01"), diags) is None
        assert [d.kind for d in diags] == [DiagnosticKind.FATAL]
        assert diags.messages == ["Start and end dates must be set."]

    def test_unparseable_dates_fatal(self):
        diags = Diagnostics()
        assert normalize_input(RosterConfig(start_date="soon", end_date="2024-01-01"), diags) is None
        assert diags.entries[0].kind == DiagnosticKind.FATAL

    def test_inverted_dates_fatal(self):
        diags = Diagnostics()
        assert normalize_input(RosterConfig(start_date="2024-02-01", end_date="2024-01-01"), diags) is None
        assert diags.messages == ["End date must be on or after start date."]

    def test_holidays_become_zero_based_and_clipped(self):
        cfg = RosterConfig(start_date="2024-01-01", end_date="2024-01-05", stat_holidays="1, 3, 40")
        period = normalize_input(cfg, Diagnostics())
        assert period.stat_holidays == frozenset({0, 2})

    def test_weekend_classification(self):
        cfg = RosterConfig(start_date="2024-01-05", end_date="2024-01-08", stat_holidays="4")
        period = normalize_input(cfg, Diagnostics())
        # Fri, Sat, Sun, Mon (holiday)
        assert [period.is_weekend(d) for d in range(4)] == [False, True, True, False]
        assert [period.is_weekend_or_holiday(d) for d in range(4)] == [False, True, True, True]
        assert period.weekday_name(0) == "Friday"
