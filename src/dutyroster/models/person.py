"""Roster member models.

A roster member is exactly one of four variants: ``NeuroResident``,
``NonNeuroResident``, ``Student`` or ``OtherLearner``. Only residents take
part in call, OR and clinic assignment; learners just receive their leave
stamps and float otherwise.
"""
from dataclasses import dataclass, field
from typing import List, Union

HOLIDAY_GROUPS = ("christmas", "new_year", "neither")


@dataclass
class BasePerson:
    """Fields shared by every roster member."""

    id: str
    name: str = ""
    email: str = ""
    vacation_days: List[int] = field(default_factory=list)  # 1-indexed day numbers

    kind = "base"

    def __post_init__(self):
        self.id = str(self.id).strip()
        self.name = str(self.name).strip()
        self.vacation_days = sorted({int(d) for d in self.vacation_days})

    @property
    def is_resident(self) -> bool:
        return False

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "type": self.kind,
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "vacation_days": list(self.vacation_days),
        }


@dataclass
class Resident(BasePerson):
    """Common resident fields. Use one of the concrete subclasses."""

    level: int = 1                  # PGY year, 1-6
    on_service: bool = True
    off_service_max_call: int = 0   # 0 = uncapped
    exempt_from_call: bool = False
    allow_solo_pgy1_call: bool = False
    holiday_group: str = "neither"

    def __post_init__(self):
        super().__post_init__()
        self.level = min(max(int(self.level), 1), 6)
        if self.off_service_max_call < 0:
            self.off_service_max_call = 0
        if self.holiday_group not in HOLIDAY_GROUPS:
            self.holiday_group = "neither"

    @property
    def is_resident(self) -> bool:
        return True

    @property
    def needs_backup(self) -> bool:
        """PGY-1s need a senior backup unless cleared for solo call."""
        return self.level == 1 and not self.allow_solo_pgy1_call

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update({
            "level": self.level,
            "on_service": self.on_service,
            "off_service_max_call": self.off_service_max_call,
            "exempt_from_call": self.exempt_from_call,
            "allow_solo_pgy1_call": self.allow_solo_pgy1_call,
            "holiday_group": self.holiday_group,
        })
        return d


@dataclass
class NeuroResident(Resident):
    """Home-program resident."""

    is_chief: bool = False
    chief_takes_call: bool = True
    chief_or_days: List[int] = field(default_factory=list)  # 1-indexed
    can_act_as_backup: bool = False

    kind = "neuro"

    def __post_init__(self):
        super().__post_init__()
        self.chief_or_days = sorted({int(d) for d in self.chief_or_days})

    @property
    def is_off_rotation(self) -> bool:
        """Home resident currently on an external rotation."""
        return not self.on_service

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update({
            "is_chief": self.is_chief,
            "chief_takes_call": self.chief_takes_call,
            "chief_or_days": list(self.chief_or_days),
            "can_act_as_backup": self.can_act_as_backup,
        })
        return d


@dataclass
class NonNeuroResident(Resident):
    """Resident from another program covering call on this service."""

    specialty: str = ""

    kind = "non-neuro"

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["specialty"] = self.specialty
        return d


@dataclass
class Student(BasePerson):
    """Medical student."""

    level: str = ""
    preceptor: str = ""

    kind = "student"

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update({"level": self.level, "preceptor": self.preceptor})
        return d


@dataclass
class OtherLearner(BasePerson):
    """Any other learner (fellow, observer, ...)."""

    role: str = ""

    kind = "other"

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["role"] = self.role
        return d


Person = Union[NeuroResident, NonNeuroResident, Student, OtherLearner]

_PERSON_TYPES = {
    cls.kind: cls for cls in (NeuroResident, NonNeuroResident, Student, OtherLearner)
}


def person_from_dict(d: dict) -> Person:
    """Create the right variant from a dictionary tagged with ``type``."""
    kind = str(d.get("type", "neuro")).strip().lower()
    cls = _PERSON_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown person type: {kind!r}")
    allowed = set(cls.__dataclass_fields__)
    return cls(**{k: v for k, v in d.items() if k in allowed})
