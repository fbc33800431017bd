"""
Pydantic Validated Models
=========================
Validation layer for raw roster payloads (JSON from the configuration UI).

Usage:
    from dutyroster.models.validated import ValidatedRosterPayload

    payload = ValidatedRosterPayload.model_validate(raw)
    people, config = payload.to_domain()

The dataclass models remain the engine's working types; this layer only
guards the boundary.
"""
from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .activity import CallKind
from .config import CallRule, HolidayBlock, OrCase, PredefinedCall, RosterConfig, StaffCall
from .person import Person, person_from_dict


class ValidatedPerson(BaseModel):
    """One roster member as received from the UI."""
    model_config = ConfigDict(extra="ignore")

    type: Literal["neuro", "non-neuro", "student", "other"] = "neuro"
    id: str = Field(min_length=1)
    name: str = ""
    email: str = ""
    vacation_days: List[int] = Field(default_factory=list)

    # Residents
    level: Optional[Union[int, str]] = None
    on_service: bool = True
    off_service_max_call: int = Field(default=0, ge=0)
    exempt_from_call: bool = False
    allow_solo_pgy1_call: bool = False
    holiday_group: Literal["christmas", "new_year", "neither"] = "neither"
    is_chief: bool = False
    chief_takes_call: bool = True
    chief_or_days: List[int] = Field(default_factory=list)
    can_act_as_backup: bool = False
    specialty: str = ""

    # Learners
    preceptor: str = ""
    role: str = ""

    @field_validator("vacation_days", "chief_or_days")
    @classmethod
    def validate_day_numbers(cls, v: List[int]) -> List[int]:
        """Day numbers are 1-indexed."""
        if any(d < 1 for d in v):
            raise ValueError("day numbers start at 1")
        return v

    @model_validator(mode="after")
    def validate_level(self):
        """Residents carry an integer PGY level between 1 and 6."""
        if self.type in ("neuro", "non-neuro"):
            if self.level is None:
                self.level = 1
            if isinstance(self.level, str) or not 1 <= self.level <= 6:
                raise ValueError(f"resident {self.id}: level must be an integer between 1 and 6")
        return self

    def to_dataclass(self) -> Person:
        data = self.model_dump()
        if self.type in ("student", "other"):
            data["level"] = "" if self.level is None else str(self.level)
        return person_from_dict(data)


class ValidatedCallRule(BaseModel):
    min_days: int = Field(ge=0)
    max_days: int = Field(ge=0)
    max_calls: int = Field(ge=0)

    @model_validator(mode="after")
    def validate_range(self):
        if self.min_days > self.max_days:
            raise ValueError("min_days cannot exceed max_days")
        return self


class ValidatedPredefinedCall(BaseModel):
    day: int = Field(ge=1)
    person_id: str
    call: CallKind


class ValidatedStaffCall(BaseModel):
    day: int = Field(ge=1)
    call_type: Literal["cranial", "spine"]
    staff_name: str = ""


class ValidatedOrCase(BaseModel):
    model_config = ConfigDict(extra="ignore")

    surgeon: str = ""
    procedure: str = ""
    complexity: Literal["routine", "complex"] = "routine"


class ValidatedHolidayBlock(BaseModel):
    start: str
    end: str


class ValidatedRosterPayload(BaseModel):
    """
    Full engine input.

    Dates stay strings here: a missing or inverted range is reported by the
    engine as a diagnostic, not rejected at the boundary.
    """
    model_config = ConfigDict(extra="ignore")

    people: List[ValidatedPerson] = Field(default_factory=list)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    stat_holidays: Union[str, List[int]] = ""
    use_predefined_call: bool = False
    predefined_calls: List[ValidatedPredefinedCall] = Field(default_factory=list)
    call_rules: List[ValidatedCallRule] = Field(default_factory=list)
    staff_call: List[ValidatedStaffCall] = Field(default_factory=list)
    or_cases: Dict[int, List[ValidatedOrCase]] = Field(default_factory=dict)
    clinic_quotas: Dict[str, Dict[str, int]] = Field(default_factory=dict)
    staff_teams: Dict[str, List[str]] = Field(default_factory=dict)
    christmas: Optional[ValidatedHolidayBlock] = None
    new_year: Optional[ValidatedHolidayBlock] = None
    check_service_coverage: bool = False
    min_available_residents: int = Field(default=3, ge=0)

    @model_validator(mode="after")
    def validate_unique_ids(self):
        ids = [p.id for p in self.people]
        if len(set(ids)) != len(ids):
            raise ValueError("person ids must be unique")
        return self

    def to_domain(self) -> Tuple[List[Person], RosterConfig]:
        """Convert to engine dataclasses."""
        def _block(b: Optional[ValidatedHolidayBlock]) -> Optional[HolidayBlock]:
            return HolidayBlock(start=b.start, end=b.end) if b else None

        config = RosterConfig(
            start_date=self.start_date,
            end_date=self.end_date,
            stat_holidays=self.stat_holidays,
            use_predefined_call=self.use_predefined_call,
            predefined_calls=[
                PredefinedCall(day=c.day, person_id=c.person_id, call=c.call)
                for c in self.predefined_calls
            ],
            call_rules=[CallRule(**r.model_dump()) for r in self.call_rules],
            staff_call=[StaffCall(**s.model_dump()) for s in self.staff_call],
            or_cases={
                day: [OrCase(**c.model_dump()) for c in cases]
                for day, cases in self.or_cases.items()
            },
            clinic_quotas={day: dict(teams) for day, teams in self.clinic_quotas.items()},
            staff_teams={team: list(names) for team, names in self.staff_teams.items()},
            christmas=_block(self.christmas),
            new_year=_block(self.new_year),
            check_service_coverage=self.check_service_coverage,
            min_available_residents=self.min_available_residents,
        )
        return [p.to_dataclass() for p in self.people], config
