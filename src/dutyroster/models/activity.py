"""Activity labels, call kinds and weekday constants."""
from enum import Enum


class Activity(str, Enum):
    """Labels a schedule cell can hold."""
    DAY_CALL = "Day Call"
    NIGHT_CALL = "Night Call"
    WEEKEND_CALL = "Weekend Call"
    POST_CALL = "Post-Call"
    VACATION = "Vacation"
    HOLIDAY = "Holiday"
    OR = "OR"
    CLINIC = "Clinic"
    BACKUP = "Backup"
    FLOAT = "Float"

    @property
    def is_absence(self) -> bool:
        """True for pre-assigned leave (vacation or holiday block)."""
        return self in (Activity.VACATION, Activity.HOLIDAY)

    @property
    def is_call(self) -> bool:
        """True for primary call labels (backup excluded)."""
        return self in (Activity.DAY_CALL, Activity.NIGHT_CALL, Activity.WEEKEND_CALL)

    @property
    def needs_rest(self) -> bool:
        """True if the following day must be post-call."""
        return self in (Activity.NIGHT_CALL, Activity.WEEKEND_CALL)

    @classmethod
    def from_string(cls, s: str) -> "Activity":
        """Parse an activity from its label or a loose alias."""
        key = str(s).strip().lower().replace("_", " ").replace("-", " ")
        mapping = {
            "day call": cls.DAY_CALL, "daycall": cls.DAY_CALL,
            "night call": cls.NIGHT_CALL, "nightcall": cls.NIGHT_CALL,
            "weekend call": cls.WEEKEND_CALL, "weekendcall": cls.WEEKEND_CALL,
            "post call": cls.POST_CALL, "postcall": cls.POST_CALL,
            "vacation": cls.VACATION,
            "holiday": cls.HOLIDAY,
            "or": cls.OR,
            "clinic": cls.CLINIC,
            "backup": cls.BACKUP,
            "float": cls.FLOAT,
        }
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown activity: {s!r}")


class CallKind(str, Enum):
    """Call codes used by predefined call tables."""
    DAY = "D"
    NIGHT = "N"
    WEEKEND = "W"

    @property
    def activity(self) -> Activity:
        return {
            CallKind.DAY: Activity.DAY_CALL,
            CallKind.NIGHT: Activity.NIGHT_CALL,
            CallKind.WEEKEND: Activity.WEEKEND_CALL,
        }[self]


# Labels that may never share a cell, except the Day+Night 24h fusion
EXCLUSIVE_ACTIVITIES = frozenset({
    Activity.VACATION,
    Activity.HOLIDAY,
    Activity.DAY_CALL,
    Activity.NIGHT_CALL,
    Activity.WEEKEND_CALL,
    Activity.OR,
    Activity.CLINIC,
    Activity.FLOAT,
})

# Python weekday() order
WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
WEEKEND_WEEKDAYS = (5, 6)

WEEKDAY_ALIASES = {
    "mon": "Monday", "monday": "Monday",
    "tue": "Tuesday", "tues": "Tuesday", "tuesday": "Tuesday",
    "wed": "Wednesday", "wednesday": "Wednesday",
    "thu": "Thursday", "thur": "Thursday", "thurs": "Thursday", "thursday": "Thursday",
    "fri": "Friday", "friday": "Friday",
    "sat": "Saturday", "saturday": "Saturday",
    "sun": "Sunday", "sunday": "Sunday",
}


def normalize_weekday(s: str) -> str:
    """Normalize a weekday name to its canonical English form (Monday, ...)."""
    key = str(s).strip().lower()
    return WEEKDAY_ALIASES.get(key, s.strip())
