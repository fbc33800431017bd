# dutyroster/models - Data models for the roster engine
from .activity import EXCLUSIVE_ACTIVITIES, WEEKDAY_NAMES, Activity, CallKind
from .config import CallRule, HolidayBlock, OrCase, PredefinedCall, RosterConfig, StaffCall
from .diagnostics import Diagnostic, DiagnosticKind, Diagnostics
from .person import (
    BasePerson,
    NeuroResident,
    NonNeuroResident,
    OtherLearner,
    Person,
    Resident,
    Student,
    person_from_dict,
)
from .rules import RULES, ScoringRules
from .schedule import AssignedRoster, Ledger, PersonSchedule, ScheduleGrid

__all__ = [
    "Activity", "CallKind", "EXCLUSIVE_ACTIVITIES", "WEEKDAY_NAMES",
    "BasePerson", "Resident", "NeuroResident", "NonNeuroResident", "Student", "OtherLearner",
    "Person", "person_from_dict",
    "RosterConfig", "CallRule", "OrCase", "PredefinedCall", "StaffCall", "HolidayBlock",
    "Diagnostic", "DiagnosticKind", "Diagnostics",
    "ScoringRules", "RULES",
    "ScheduleGrid", "Ledger", "AssignedRoster", "PersonSchedule",
]
