"""Diagnostics emitted while building a roster.

Diagnostics never abort a run: every pass appends to the same collector and
the caller surfaces the messages to the end user.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from dutyroster.utils.logging_setup import get_logger

logger = get_logger("dutyroster.models.diagnostics")


class DiagnosticKind(str, Enum):
    """Category of a diagnostic."""
    FATAL = "fatal"                                 # bad date range, nothing scheduled
    NO_ELIGIBLE_RESIDENT = "no_eligible_resident"
    NO_BACKUP = "no_backup"
    POST_CALL_CONFLICT = "post_call_conflict"
    PREDEFINED_CALL = "predefined_call"
    COVERAGE = "coverage"


@dataclass(frozen=True)
class Diagnostic:
    """Single human-readable rule violation."""
    kind: DiagnosticKind
    message: str
    person_id: Optional[str] = None
    day_index: Optional[int] = None  # 0-based

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "person_id": self.person_id,
            "day_index": self.day_index,
        }


class Diagnostics:
    """Append-only, ordered collection of diagnostics."""

    def __init__(self):
        self._entries: List[Diagnostic] = []

    def add(
        self,
        kind: DiagnosticKind,
        message: str,
        person_id: Optional[str] = None,
        day_index: Optional[int] = None,
    ) -> Diagnostic:
        entry = Diagnostic(kind, message, person_id, day_index)
        self._entries.append(entry)
        logger.warning(f"[{kind.value}] {message}")
        return entry

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[Diagnostic, ...]:
        return tuple(self._entries)

    @property
    def messages(self) -> List[str]:
        return [d.message for d in self._entries]

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self._entries if d.kind == kind]
