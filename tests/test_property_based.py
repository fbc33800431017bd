"""
Property-Based Tests with Hypothesis
====================================
Invariants that must hold for any roster the engine produces.
"""
from datetime import date, timedelta

from hypothesis import given, settings, strategies as st

from dutyroster import generate_schedule
from dutyroster.models.activity import Activity
from dutyroster.models.config import CallRule, OrCase, RosterConfig
from dutyroster.models.person import NeuroResident, NonNeuroResident, Student
from dutyroster.solver.validation import validate_roster

CALL_LABELS = {Activity.DAY_CALL.value, Activity.NIGHT_CALL.value, Activity.WEEKEND_CALL.value}


@st.composite
def roster_inputs(draw):
    """A random roster, period and demand."""
    num_days = draw(st.integers(min_value=1, max_value=21))
    start = date(2024, 1, 1) + timedelta(days=draw(st.integers(min_value=0, max_value=6)))
    day_numbers = st.integers(min_value=1, max_value=num_days + 2)

    people = []
    for i in range(draw(st.integers(min_value=0, max_value=7))):
        kind = draw(st.sampled_from(["neuro", "neuro", "non-neuro", "student"]))
        vacation = draw(st.lists(day_numbers, max_size=4))
        if kind == "student":
            people.append(Student(id=f"r{i}", vacation_days=vacation))
        elif kind == "non-neuro":
            people.append(NonNeuroResident(
                id=f"r{i}",
                level=draw(st.integers(min_value=1, max_value=6)),
                vacation_days=vacation,
                off_service_max_call=draw(st.integers(min_value=0, max_value=5)),
                exempt_from_call=draw(st.booleans()),
            ))
        else:
            people.append(NeuroResident(
                id=f"r{i}",
                level=draw(st.integers(min_value=1, max_value=6)),
                vacation_days=vacation,
                on_service=draw(st.booleans()),
                allow_solo_pgy1_call=draw(st.booleans()),
                is_chief=draw(st.booleans()),
                chief_or_days=draw(st.lists(day_numbers, max_size=3)),
                can_act_as_backup=draw(st.booleans()),
            ))

    holidays = draw(st.lists(day_numbers, max_size=3))
    or_cases = {
        d: [
            OrCase(surgeon="Archer", complexity=c)
            for c in draw(st.lists(st.sampled_from(["routine", "complex"]), max_size=3))
        ]
        for d in draw(st.lists(day_numbers, max_size=5))
    }
    config = RosterConfig(
        start_date=start,
        end_date=start + timedelta(days=num_days - 1),
        stat_holidays=",".join(str(h) for h in holidays),
        call_rules=[CallRule(0, 10, draw(st.integers(min_value=0, max_value=6))), CallRule(11, 31, 8)],
        or_cases=or_cases,
        clinic_quotas={"Monday": {"red": draw(st.integers(min_value=0, max_value=2))}},
        staff_teams={"red": ["Archer"]},
    )
    return people, config


class TestRosterInvariants:
    """Invariants over arbitrary rosters."""

    @settings(max_examples=50, deadline=None)
    @given(inputs=roster_inputs())
    def test_roster_is_valid(self, inputs):
        people, config = inputs
        roster = generate_schedule(people, config)

        result = validate_roster(roster, config)
        assert result.is_valid, [v.message for v in result.violations]

    @settings(max_examples=50, deadline=None)
    @given(inputs=roster_inputs())
    def test_every_cell_filled(self, inputs):
        people, config = inputs
        roster = generate_schedule(people, config)

        assert len(roster.rows) == len(people)
        for row in roster.rows:
            assert len(row.schedule) == len(roster.dates)
            assert all(row.schedule)

    @settings(max_examples=50, deadline=None)
    @given(inputs=roster_inputs())
    def test_vacation_respected(self, inputs):
        people, config = inputs
        roster = generate_schedule(people, config)

        for row in roster.rows:
            for day in row.person.vacation_days:
                if day <= len(roster.dates):
                    assert row.schedule[day - 1] == [Activity.VACATION.value]

    @settings(max_examples=50, deadline=None)
    @given(inputs=roster_inputs())
    def test_learners_never_on_call(self, inputs):
        people, config = inputs
        roster = generate_schedule(people, config)

        for row in roster.rows:
            if isinstance(row.person, Student):
                assert all(cell in ([Activity.FLOAT.value], [Activity.VACATION.value]) for cell in row.schedule)
                assert row.ledger.call_count == 0

    @settings(max_examples=30, deadline=None)
    @given(inputs=roster_inputs())
    def test_deterministic(self, inputs):
        people, config = inputs
        first = generate_schedule(people, config)
        second = generate_schedule(people, config)

        assert [r.schedule for r in first.rows] == [r.schedule for r in second.rows]
        assert first.messages == second.messages

    @settings(max_examples=30, deadline=None)
    @given(inputs=roster_inputs())
    def test_call_days_match_cells(self, inputs):
        people, config = inputs
        roster = generate_schedule(people, config)

        for row in roster.rows:
            stamped = [d for d, cell in enumerate(row.schedule) if CALL_LABELS & set(cell)]
            assert row.ledger.call_days == stamped
