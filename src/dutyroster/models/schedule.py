"""Schedule arena and the assigned-roster result."""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from .activity import Activity
from .diagnostics import Diagnostic
from .person import BasePerson, Resident


@dataclass
class Ledger:
    """Running per-person counters updated as assignments are made."""
    call_days: List[int] = field(default_factory=list)  # 0-based day indices
    weekend_calls: int = 0
    double_call_days: int = 0
    or_days: int = 0

    @property
    def call_count(self) -> int:
        return len(self.call_days)

    @property
    def last_call_day(self) -> Optional[int]:
        return self.call_days[-1] if self.call_days else None

    def to_dict(self) -> dict:
        return {
            "call_days": list(self.call_days),
            "weekend_calls": self.weekend_calls,
            "double_call_days": self.double_call_days,
            "or_days": self.or_days,
        }


class ScheduleGrid:
    """
    Fixed people × days table addressed by integer indices.

    Every pass receives the grid, mutates cells in place and hands it back.
    A cell is occupied as soon as it holds one label; passes after call
    assignment never touch occupied cells.
    """

    def __init__(self, people: Sequence[BasePerson], dates: Sequence[date]):
        ids = [p.id for p in people]
        if len(set(ids)) != len(ids):
            raise ValueError("Person ids must be unique")

        self.people: List[BasePerson] = list(people)
        self.dates: List[date] = list(dates)
        self.cells: List[List[List[Activity]]] = [
            [[] for _ in self.dates] for _ in self.people
        ]
        self.ledgers: List[Ledger] = [Ledger() for _ in self.people]
        # day -> one list of person indices per staffed OR case
        self.theatre: Dict[int, List[List[int]]] = {}
        self._index = {p.id: i for i, p in enumerate(self.people)}

    def __repr__(self) -> str:
        return f"ScheduleGrid(people={self.num_people}, days={self.num_days})"

    @property
    def num_people(self) -> int:
        return len(self.people)

    @property
    def num_days(self) -> int:
        return len(self.dates)

    def index_of(self, person_id: str) -> Optional[int]:
        return self._index.get(str(person_id))

    def residents(self) -> List[Tuple[int, Resident]]:
        """(index, resident) pairs in roster order."""
        return [(i, p) for i, p in enumerate(self.people) if isinstance(p, Resident)]

    # ---- cell access ----

    def cell(self, p: int, d: int) -> List[Activity]:
        return self.cells[p][d]

    def is_occupied(self, p: int, d: int) -> bool:
        return len(self.cells[p][d]) > 0

    def has(self, p: int, d: int, *activities: Activity) -> bool:
        if not 0 <= d < self.num_days:
            return False
        return any(a in self.cells[p][d] for a in activities)

    def is_absent(self, p: int, d: int) -> bool:
        return any(a.is_absence for a in self.cells[p][d])

    def stamp(self, p: int, d: int, activity: Activity):
        """Append a label to a cell."""
        self.cells[p][d].append(activity)

    def replace(self, p: int, d: int, activity: Activity):
        """Overwrite a cell with a single label."""
        self.cells[p][d] = [activity]

    # ---- ledger updates ----

    def record_call(self, p: int, d: int, weekend: bool = False, double_call: bool = False):
        """Book a primary call on the ledger (backup calls are not booked)."""
        ledger = self.ledgers[p]
        if d not in ledger.call_days:
            ledger.call_days.append(d)
            ledger.call_days.sort()
            if weekend:
                ledger.weekend_calls += 1
            if double_call:
                ledger.double_call_days += 1

    def record_or(self, p: int, d: int, case_team: Optional[List[int]] = None):
        """Book an OR day; opens a new case team unless joining one."""
        self.ledgers[p].or_days += 1
        if case_team is None:
            self.theatre.setdefault(d, []).append([p])
        else:
            case_team.append(p)

    def or_occupants(self, d: int) -> List[int]:
        return [p for p in range(self.num_people) if Activity.OR in self.cells[p][d]]


@dataclass
class PersonSchedule:
    """One roster member's finished row."""
    person: BasePerson
    schedule: List[List[str]]
    ledger: Ledger

    @property
    def id(self) -> str:
        return self.person.id

    @property
    def name(self) -> str:
        return self.person.name


@dataclass
class AssignedRoster:
    """Result of a run: filled rows plus the ordered diagnostics."""

    rows: List[PersonSchedule] = field(default_factory=list)
    dates: List[date] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    theatre: Dict[int, List[List[str]]] = field(default_factory=dict)  # day -> case teams (ids)

    @classmethod
    def from_grid(cls, grid: ScheduleGrid, diagnostics: Sequence[Diagnostic]) -> "AssignedRoster":
        rows = [
            PersonSchedule(
                person=person,
                schedule=[[a.value for a in cell] for cell in grid.cells[i]],
                ledger=grid.ledgers[i],
            )
            for i, person in enumerate(grid.people)
        ]
        theatre = {
            d: [[grid.people[p].id for p in team] for team in teams]
            for d, teams in sorted(grid.theatre.items())
        }
        return cls(rows=rows, dates=list(grid.dates), diagnostics=list(diagnostics), theatre=theatre)

    @property
    def messages(self) -> List[str]:
        """Diagnostic strings in emission order."""
        return [d.message for d in self.diagnostics]

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def row(self, person_id: str) -> PersonSchedule:
        for r in self.rows:
            if r.id == person_id:
                return r
        raise KeyError(person_id)

    def schedule_for(self, person_id: str) -> List[List[str]]:
        return self.row(person_id).schedule

    def to_dataframe(self) -> pd.DataFrame:
        """Long form: one line per (person, day, activity)."""
        columns = ["person_id", "name", "day", "date", "activity"]
        records = [
            {
                "person_id": r.id,
                "name": r.name,
                "day": d + 1,
                "date": self.dates[d],
                "activity": label,
            }
            for r in self.rows
            for d, cell in enumerate(r.schedule)
            for label in cell
        ]
        if not records:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame(records, columns=columns)

    def to_matrix(self) -> pd.DataFrame:
        """Person × date matrix, multi-label cells joined with '/'."""
        if not self.rows:
            return pd.DataFrame()
        return pd.DataFrame(
            [["/".join(cell) for cell in r.schedule] for r in self.rows],
            index=[r.name or r.id for r in self.rows],
            columns=self.dates,
        )

    def summary(self) -> Dict[str, Any]:
        """Get summary dictionary for display."""
        return {
            "days": len(self.dates),
            "people": len(self.rows),
            "start": self.dates[0].isoformat() if self.dates else None,
            "end": self.dates[-1].isoformat() if self.dates else None,
            "diagnostics": len(self.diagnostics),
            "calls": sum(r.ledger.call_count for r in self.rows),
        }
