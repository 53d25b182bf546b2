"""Ledger commands.

These are the only sanctioned way to change both the history list and the
denormalized counters on a component. Each `apply` returns a whole new
snapshot, which the store swaps in as one transaction.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, Optional, Sequence

from ..core.enums import CellState, EntryStatus
from ..core.exceptions import NotFoundError
from ..state.snapshot import Snapshot
from ..subjects.model import SubjectComponent
from ..subjects.operations import find_component, resolve_component, with_component
from .model import AttendanceEntry


def cell_entries(history: Sequence[AttendanceEntry], subject_id: str, component_id: str, on: date) -> list[AttendanceEntry]:
    return [e for e in history if e.subject_id == subject_id and e.component_id == component_id and e.date == on]


def resolve_cell(history: Sequence[AttendanceEntry], subject_id: str, component_id: str, on: date) -> Optional[AttendanceEntry]:
    """The entry a calendar cell shows.

    Duplicates are possible in stored data; the newest `created_at` wins and
    ties go to the entry appended last.
    """
    best = None
    for e in cell_entries(history, subject_id, component_id, on):
        if best is None or e.created_at >= best.created_at:
            best = e
    return best


def _shift_counts(attended_delta: int, total_delta: int) -> Callable[[SubjectComponent], SubjectComponent]:
    def _change(c: SubjectComponent) -> SubjectComponent:
        return replace(
            c,
            attended=max(0, c.attended + attended_delta),
            total=max(0, c.total + total_delta),
        )

    return _change


def _without(history: Sequence[AttendanceEntry], entry_id: str) -> tuple[AttendanceEntry, ...]:
    return tuple(e for e in history if e.entry_id != entry_id)


@dataclass(frozen=True)
class ToggleAttendance:
    """Cycle one cell: none -> present -> absent -> none.

    none -> present   : add present entry, attended +1, total +1
    present -> absent : replace with absent entry, attended -1
    absent -> none    : drop the entry, counters unchanged

    The last step keeps the session counted as held even though no entry
    justifies it any more. This matches how existing user data was produced.
    """

    subject_id: str
    component_id: str
    date: date

    def next_state(self, snapshot: Snapshot) -> CellState:
        current = resolve_cell(snapshot.history, self.subject_id, self.component_id, self.date)
        if current is None:
            return CellState.PRESENT
        if current.status == EntryStatus.PRESENT:
            return CellState.ABSENT
        return CellState.NONE

    def apply(self, snapshot: Snapshot, *, entry_id: str, created_at: int) -> Snapshot:
        subject, component = find_component(snapshot, self.subject_id, self.component_id)
        current = resolve_cell(snapshot.history, self.subject_id, self.component_id, self.date)

        if current is None:
            entry = _new_entry(subject.name, component, self, EntryStatus.PRESENT, entry_id, created_at)
            updated = with_component(snapshot, self.subject_id, self.component_id, _shift_counts(+1, +1))
            return replace(updated, history=updated.history + (entry,))

        history = _without(snapshot.history, current.entry_id)
        if current.status == EntryStatus.PRESENT:
            entry = _new_entry(subject.name, component, self, EntryStatus.ABSENT, entry_id, created_at)
            updated = with_component(snapshot, self.subject_id, self.component_id, _shift_counts(-1, 0))
            return replace(updated, history=history + (entry,))

        return replace(snapshot, history=history)


@dataclass(frozen=True)
class MarkAttendance:
    """Quick-log one session for a date without toggling an existing cell."""

    subject_id: str
    component_id: str
    date: date
    status: EntryStatus

    def apply(self, snapshot: Snapshot, *, entry_id: str, created_at: int) -> Snapshot:
        subject, component = find_component(snapshot, self.subject_id, self.component_id)
        attended_delta = 1 if self.status == EntryStatus.PRESENT else 0
        entry = _new_entry(subject.name, component, self, self.status, entry_id, created_at)
        updated = with_component(snapshot, self.subject_id, self.component_id, _shift_counts(attended_delta, +1))
        return replace(updated, history=updated.history + (entry,))


@dataclass(frozen=True)
class DeleteEntry:
    """Undo one entry's contribution: present -> attended -1 and total -1,
    absent -> total -1. Counters never drop below zero. Orphaned entries are
    removed without touching any counters.
    """

    entry_id: str

    def apply(self, snapshot: Snapshot) -> Snapshot:
        entry = next((e for e in snapshot.history if e.entry_id == self.entry_id), None)
        if entry is None:
            raise NotFoundError(f"Entry {self.entry_id} not found")

        updated = replace(snapshot, history=_without(snapshot.history, self.entry_id))
        if resolve_component(snapshot, entry.subject_id, entry.component_id) is None:
            return updated

        attended_delta = -1 if entry.status == EntryStatus.PRESENT else 0
        return with_component(updated, entry.subject_id, entry.component_id, _shift_counts(attended_delta, -1))


def _new_entry(subject_name: str, component: SubjectComponent, cmd, status: EntryStatus, entry_id: str, created_at: int) -> AttendanceEntry:
    return AttendanceEntry(
        entry_id=entry_id,
        subject_id=cmd.subject_id,
        component_id=cmd.component_id,
        subject_name=subject_name,
        component_type=component.component_type.value,
        date=cmd.date,
        status=status,
        created_at=created_at,
    )
