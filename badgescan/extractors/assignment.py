# badgescan/extractors/assignment.py
from __future__ import annotations
import logging
from enum import Enum
from typing import Dict, Optional

from .candidates import FieldCategory, Line, ScanResult
from .orchestrator import resolve_fields

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    EMPTY = "empty"
    INITIALIZED = "initialized"
    EDITING = "editing"
    FINALIZED = "finalized"
    CANCELLED = "cancelled"


class SessionStateError(RuntimeError):
    """Raised when an operation is not allowed in the session's current state."""


class SessionClosedError(SessionStateError):
    """Raised when a finalized or cancelled session is edited."""


class AssignmentSession:
    """
    User-correctable mapping from field category to final value, for one scan.

    Seeded from the field selector, then edited freely. Values need not come
    from a scanned line, and one line may feed several categories.
    """

    def __init__(self) -> None:
        self.state = SessionState.EMPTY
        self._values: Dict[FieldCategory, Optional[str]] = {cat: None for cat in FieldCategory}
        self._relevant: frozenset = frozenset()

    @classmethod
    def from_scan(cls, scan: ScanResult) -> "AssignmentSession":
        session = cls()
        session.initialize(scan)
        return session

    def _check_open(self) -> None:
        if self.state in (SessionState.FINALIZED, SessionState.CANCELLED):
            raise SessionClosedError(f"session is {self.state.value}")

    def _check_editable(self) -> None:
        self._check_open()
        if self.state == SessionState.EMPTY:
            raise SessionStateError("session is not initialized")

    def _touch(self) -> None:
        self._check_editable()
        self.state = SessionState.EDITING

    def initialize(self, scan: ScanResult) -> None:
        """Seeds values from the field selector. Only once: re-seeding would drop user edits."""
        self._check_open()
        if self.state != SessionState.EMPTY:
            raise SessionStateError(f"session is already {self.state.value}")
        self._relevant = frozenset(scan.relevant)
        picked = resolve_fields(scan.candidates)
        self._values = {cat: (c.value if c else None) for cat, c in picked.items()}
        self.state = SessionState.INITIALIZED

    def get(self, category: FieldCategory) -> Optional[str]:
        return self._values[FieldCategory(category)]

    @property
    def values(self) -> Dict[FieldCategory, Optional[str]]:
        return dict(self._values)

    def assign_line(self, line: Line, category: FieldCategory) -> bool:
        """Assigns the line text verbatim; lines outside the scan's relevant set are ignored."""
        self._check_editable()
        if line not in self._relevant:
            logger.debug("ignoring assignment of foreign line %r", line)
            return False
        self._touch()
        self._values[FieldCategory(category)] = line.text
        return True

    def assign_free_text(self, category: FieldCategory, text: str) -> bool:
        self._check_editable()
        if not text or not text.strip():
            return False
        self._touch()
        self._values[FieldCategory(category)] = text
        return True

    def remove_assignment(self, category: FieldCategory) -> None:
        self._touch()
        self._values[FieldCategory(category)] = None

    def is_line_consumed(self, line: Line) -> bool:
        return any(v == line.text for v in self._values.values() if v is not None)

    def finalize(self) -> Dict[str, str]:
        """Plain {category: value} snapshot, empty categories omitted. Closes the session."""
        if self.state == SessionState.CANCELLED:
            raise SessionClosedError("session is cancelled")
        self.state = SessionState.FINALIZED
        return {cat.value: v for cat, v in self._values.items() if v}

    def cancel(self) -> None:
        self._check_open()
        self._values = {cat: None for cat in FieldCategory}
        self.state = SessionState.CANCELLED
