"""
Duty Roster Engine
==================
Deterministic allocation of call, post-call rest, OR and clinic duty for a
residency roster.

Usage:
    from dutyroster import generate_schedule, RosterConfig, NeuroResident

    roster = generate_schedule(people, RosterConfig(start_date="2024-01-01", end_date="2024-01-31"))
    for message in roster.messages:
        print(message)
"""
from dutyroster.models import (
    Activity,
    AssignedRoster,
    CallRule,
    NeuroResident,
    NonNeuroResident,
    OrCase,
    OtherLearner,
    RosterConfig,
    Student,
)
from dutyroster.solver import generate_from_payload, generate_schedule, validate_roster

__version__ = "0.3.0"

__all__ = [
    "generate_schedule",
    "generate_from_payload",
    "validate_roster",
    "AssignedRoster",
    "RosterConfig",
    "CallRule",
    "OrCase",
    "Activity",
    "NeuroResident",
    "NonNeuroResident",
    "Student",
    "OtherLearner",
]
