"""Engine configuration and per-day demand definitions."""
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Union

from .activity import CallKind, normalize_weekday


@dataclass
class CallRule:
    """On-service call quota band, keyed on days available in the period."""
    min_days: int
    max_days: int
    max_calls: int

    def contains(self, available_days: int) -> bool:
        return self.min_days <= available_days <= self.max_days


@dataclass
class OrCase:
    """One operating-room case on a given day."""
    surgeon: str = ""
    procedure: str = ""
    complexity: str = "routine"

    @property
    def is_complex(self) -> bool:
        return self.complexity.strip().lower() == "complex"


@dataclass
class PredefinedCall:
    """Fixed call entry used when the predefined schedule is switched on."""
    day: int  # 1-indexed
    person_id: str
    call: CallKind

    def __post_init__(self):
        self.day = int(self.day)
        self.person_id = str(self.person_id)
        if not isinstance(self.call, CallKind):
            self.call = CallKind(str(self.call).strip().upper())


@dataclass
class StaffCall:
    """Attending staff on call for a day."""
    day: int  # 1-indexed
    call_type: str  # "cranial" | "spine"
    staff_name: str = ""


@dataclass
class HolidayBlock:
    """Inclusive date range of a seasonal holiday block."""
    start: Union[str, date]
    end: Union[str, date]


@dataclass
class RosterConfig:
    """Everything the engine needs besides the people themselves."""

    # Period
    start_date: Optional[Union[str, date]] = None
    end_date: Optional[Union[str, date]] = None
    stat_holidays: Union[str, List[int]] = ""  # 1-indexed day numbers

    # Call
    use_predefined_call: bool = False
    predefined_calls: List[PredefinedCall] = field(default_factory=list)
    call_rules: List[CallRule] = field(default_factory=list)
    staff_call: List[StaffCall] = field(default_factory=list)

    # OR / clinic demand
    or_cases: Dict[int, List[OrCase]] = field(default_factory=dict)  # 1-indexed day -> cases
    clinic_quotas: Dict[str, Dict[str, int]] = field(default_factory=dict)  # weekday -> team -> slots
    staff_teams: Dict[str, List[str]] = field(default_factory=dict)  # team -> surgeon names

    # Holiday blocks
    christmas: Optional[HolidayBlock] = None
    new_year: Optional[HolidayBlock] = None

    # Optional service coverage check
    check_service_coverage: bool = False
    min_available_residents: int = 3

    def __post_init__(self):
        self.or_cases = {int(k): list(v) for k, v in self.or_cases.items()}
        self.clinic_quotas = {
            normalize_weekday(day): dict(teams) for day, teams in self.clinic_quotas.items()
        }

    def holiday_block(self, group: str) -> Optional[HolidayBlock]:
        """Block matching a resident's holiday group, if configured."""
        if group == "christmas":
            return self.christmas
        if group == "new_year":
            return self.new_year
        return None

    def to_dict(self) -> Dict:
        """Serialize to dictionary."""
        def _d(v):
            return v.isoformat() if isinstance(v, date) else v

        def _block(b):
            return {"start": _d(b.start), "end": _d(b.end)} if b else None

        return {
            "start_date": _d(self.start_date),
            "end_date": _d(self.end_date),
            "stat_holidays": self.stat_holidays,
            "use_predefined_call": self.use_predefined_call,
            "predefined_calls": [
                {"day": c.day, "person_id": c.person_id, "call": c.call.value}
                for c in self.predefined_calls
            ],
            "call_rules": [
                {"min_days": r.min_days, "max_days": r.max_days, "max_calls": r.max_calls}
                for r in self.call_rules
            ],
            "staff_call": [
                {"day": s.day, "call_type": s.call_type, "staff_name": s.staff_name}
                for s in self.staff_call
            ],
            "or_cases": {
                day: [{"surgeon": c.surgeon, "procedure": c.procedure, "complexity": c.complexity}
                      for c in cases]
                for day, cases in self.or_cases.items()
            },
            "clinic_quotas": self.clinic_quotas,
            "staff_teams": self.staff_teams,
            "christmas": _block(self.christmas),
            "new_year": _block(self.new_year),
            "check_service_coverage": self.check_service_coverage,
            "min_available_residents": self.min_available_residents,
        }

    @classmethod
    def from_dict(cls, d: Dict) -> "RosterConfig":
        """Create from dictionary."""
        def _block(b):
            return HolidayBlock(start=b["start"], end=b["end"]) if b else None

        return cls(
            start_date=d.get("start_date"),
            end_date=d.get("end_date"),
            stat_holidays=d.get("stat_holidays", ""),
            use_predefined_call=bool(d.get("use_predefined_call", False)),
            predefined_calls=[PredefinedCall(**c) for c in d.get("predefined_calls", [])],
            call_rules=[CallRule(**r) for r in d.get("call_rules", [])],
            staff_call=[StaffCall(**s) for s in d.get("staff_call", [])],
            or_cases={
                int(day): [OrCase(**c) for c in cases]
                for day, cases in d.get("or_cases", {}).items()
            },
            clinic_quotas=d.get("clinic_quotas", {}),
            staff_teams=d.get("staff_teams", {}),
            christmas=_block(d.get("christmas")),
            new_year=_block(d.get("new_year")),
            check_service_coverage=bool(d.get("check_service_coverage", False)),
            min_available_residents=int(d.get("min_available_residents", 3)),
        )
