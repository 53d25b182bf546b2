from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import CellState, DayState, EntryStatus


@dataclass(frozen=True)
class AttendanceEntry:
    """One historical fact: on `date` the student was present/absent.

    `subject_name` and `component_type` are captured at write time and are not
    kept in sync with later renames.
    """

    entry_id: str
    subject_id: str
    component_id: str
    subject_name: str
    component_type: str
    date: date
    status: EntryStatus
    created_at: int


@dataclass(frozen=True)
class DaySummary:
    """Read-model for one calendar day."""

    date: date
    state: DayState
    present_count: int
    absent_count: int
    entries: list[AttendanceEntry]


@dataclass(frozen=True)
class CellView:
    subject_id: str
    component_id: str
    date: date
    state: CellState
    entry: Optional[AttendanceEntry] = None
    duplicate_count: int = 0
