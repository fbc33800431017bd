"""Tests for roster validation."""
from conftest import make_grid
from dutyroster import generate_schedule
from dutyroster.models.activity import Activity
from dutyroster.models.config import CallRule, RosterConfig
from dutyroster.models.diagnostics import DiagnosticKind, Diagnostics
from dutyroster.models.person import NeuroResident
from dutyroster.models.schedule import AssignedRoster
from dutyroster.solver.validation import ValidationResult, validate_roster


def roster_from(grid, diagnostics=()):
    return AssignedRoster.from_grid(grid, list(diagnostics))


class TestValidateRoster:
    """Tests for validate_roster."""

    def test_engine_output_is_valid(self, pgy1, pgy4, pgy5, week_config):
        roster = generate_schedule([pgy1, pgy4, pgy5], week_config)
        result = validate_roster(roster, week_config)

        assert isinstance(result, ValidationResult)
        assert result.is_valid
        assert result.as_dict() == {
            "double_bookings": 0,
            "post_call_gaps": 0,
            "quota_breaches": 0,
            "missing_backups": 0,
        }

    def test_fused_24h_is_not_double_booking(self, pgy4):
        grid, _ = make_grid([pgy4], 1)
        grid.stamp(0, 0, Activity.DAY_CALL)
        grid.stamp(0, 0, Activity.NIGHT_CALL)
        assert validate_roster(roster_from(grid)).double_bookings == 0

    def test_double_booking(self, pgy4):
        grid, _ = make_grid([pgy4], 1)
        grid.stamp(0, 0, Activity.OR)
        grid.stamp(0, 0, Activity.CLINIC)
        result = validate_roster(roster_from(grid))

        assert result.double_bookings == 1
        assert result.violations[0].type == "double_booking"
        assert result.violations[0].day == 1

    def test_backup_may_share_a_cell(self, pgy4):
        grid, _ = make_grid([pgy4], 1)
        grid.stamp(0, 0, Activity.OR)
        grid.stamp(0, 0, Activity.BACKUP)
        assert validate_roster(roster_from(grid)).is_valid

    def test_missing_post_call(self, pgy4):
        grid, _ = make_grid([pgy4], 2)
        grid.stamp(0, 0, Activity.NIGHT_CALL)
        grid.stamp(0, 1, Activity.FLOAT)
        result = validate_roster(roster_from(grid))

        assert result.post_call_gaps == 1
        assert result.violations[0].day == 2

    def test_reported_post_call_conflict_is_explained(self, pgy4):
        grid, _ = make_grid([pgy4], 2)
        grid.stamp(0, 0, Activity.NIGHT_CALL)
        grid.stamp(0, 1, Activity.OR)
        diags = Diagnostics()
        diags.add(DiagnosticKind.POST_CALL_CONFLICT, "blocked", person_id="r4", day_index=1)
        assert validate_roster(roster_from(grid, diags)).post_call_gaps == 0

    def test_missing_backup(self, pgy1, pgy4):
        grid, _ = make_grid([pgy1, pgy4], 1)
        grid.stamp(0, 0, Activity.DAY_CALL)
        grid.stamp(1, 0, Activity.FLOAT)
        result = validate_roster(roster_from(grid))

        assert result.missing_backups == 1
        assert result.violations[0].person_id == "r1"

    def test_reported_missing_backup_is_explained(self, pgy1):
        grid, _ = make_grid([pgy1], 1)
        grid.stamp(0, 0, Activity.WEEKEND_CALL)
        diags = Diagnostics()
        diags.add(DiagnosticKind.NO_BACKUP, "none", person_id="r1", day_index=0)
        assert validate_roster(roster_from(grid, diags)).missing_backups == 0

    def test_quota_checked_only_with_config(self, pgy4):
        grid, _ = make_grid([pgy4], 3)
        for d in range(3):
            grid.record_call(0, d)
        roster = roster_from(grid)
        config = RosterConfig(call_rules=[CallRule(0, 5, 2)])

        assert validate_roster(roster).quota_breaches == 0
        result = validate_roster(roster, config)
        assert result.quota_breaches == 1
        assert result.violations[0].day == 3
