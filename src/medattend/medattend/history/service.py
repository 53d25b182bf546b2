from __future__ import annotations

import calendar
import logging
from datetime import MAXYEAR, MINYEAR, date
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_millis, parse_iso_date
from ..core.enums import CellState, DayState, EntryStatus
from ..core.exceptions import ValidationError
from ..state.store import StateStore
from ..subjects.operations import new_id, resolve_component
from .commands import DeleteEntry, MarkAttendance, ToggleAttendance, cell_entries, resolve_cell
from .model import AttendanceEntry, CellView, DaySummary

logger = logging.getLogger(__name__)


class LedgerService:
    """Use case: log, toggle and undo per-date attendance facts."""

    def __init__(
        self,
        store: StateStore,
        *,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self._store = store
        self._new_id = id_factory or new_id
        self._clock = clock or now_millis

    def _stamp(self) -> int:
        # Keep creation order strictly increasing so "newest" is well defined.
        latest = max((e.created_at for e in self._store.snapshot.history), default=0)
        return max(self._clock(), latest + 1)

    def toggle(self, subject_id: str, component_id: str, on) -> CellView:
        cmd = ToggleAttendance(subject_id=subject_id, component_id=component_id, date=parse_iso_date(on))
        entry_id, created_at = self._new_id(), self._stamp()
        self._store.apply(lambda snap: cmd.apply(snap, entry_id=entry_id, created_at=created_at))
        view = self.cell_state(subject_id, component_id, cmd.date)
        logger.debug("Toggled %s/%s on %s -> %s", subject_id, component_id, cmd.date, view.state.value)
        return view

    def mark(self, subject_id: str, component_id: str, on, status) -> AttendanceEntry:
        cmd = MarkAttendance(
            subject_id=subject_id,
            component_id=component_id,
            date=parse_iso_date(on),
            status=EntryStatus(status),
        )
        entry_id, created_at = self._new_id(), self._stamp()
        snap = self._store.apply(lambda s: cmd.apply(s, entry_id=entry_id, created_at=created_at))
        return next(e for e in snap.history if e.entry_id == entry_id)

    def delete_entry(self, entry_id: str) -> None:
        cmd = DeleteEntry(entry_id=entry_id)
        self._store.apply(cmd.apply)

    def cell_state(self, subject_id: str, component_id: str, on) -> CellView:
        on = parse_iso_date(on)
        history = self._store.snapshot.history
        entry = resolve_cell(history, subject_id, component_id, on)
        state = CellState.NONE if entry is None else CellState(entry.status.value)
        return CellView(
            subject_id=subject_id,
            component_id=component_id,
            date=on,
            state=state,
            entry=entry,
            duplicate_count=max(0, len(cell_entries(history, subject_id, component_id, on)) - 1),
        )

    def recent(self, limit: int = 30) -> list[AttendanceEntry]:
        items = sorted(self._store.snapshot.history, key=lambda e: e.created_at, reverse=True)
        return items[: max(0, int(limit))]

    def entries_for_date(self, on) -> list[AttendanceEntry]:
        on = parse_iso_date(on)
        items = [e for e in self._store.snapshot.history if e.date == on]
        items.sort(key=lambda e: e.created_at, reverse=True)
        return items

    def entries_for_component(self, subject_id: str, component_id: str) -> list[AttendanceEntry]:
        items = [
            e
            for e in self._store.snapshot.history
            if e.subject_id == subject_id and e.component_id == component_id
        ]
        items.sort(key=lambda e: (e.date, e.created_at))
        return items

    def orphaned_entries(self) -> list[AttendanceEntry]:
        snap = self._store.snapshot
        return [e for e in snap.history if resolve_component(snap, e.subject_id, e.component_id) is None]

    def day_summary(self, on) -> DaySummary:
        on = parse_iso_date(on)
        return _summarize_day(on, self.entries_for_date(on))

    def month_summary(self, year: int, month: int) -> list[DaySummary]:
        year, month = int(year), int(month)
        if not MINYEAR <= year <= MAXYEAR:
            raise ValidationError(f"Year must be between {MINYEAR} and {MAXYEAR}")
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")

        by_date: dict[date, list[AttendanceEntry]] = {}
        for e in self._store.snapshot.history:
            if e.date.year == year and e.date.month == month:
                by_date.setdefault(e.date, []).append(e)

        days = calendar.monthrange(year, month)[1]
        out = []
        for day in range(1, days + 1):
            on = date(year, month, day)
            entries = sorted(by_date.get(on, []), key=lambda e: e.created_at, reverse=True)
            out.append(_summarize_day(on, entries))
        return out


def _summarize_day(on: date, entries: Sequence[AttendanceEntry]) -> DaySummary:
    present = sum(1 for e in entries if e.status == EntryStatus.PRESENT)
    absent = len(entries) - present

    if not entries:
        state = DayState.OFF
    elif present == len(entries):
        state = DayState.FULL
    elif absent == len(entries):
        state = DayState.MISSED
    else:
        state = DayState.MIXED

    return DaySummary(date=on, state=state, present_count=present, absent_count=absent, entries=list(entries))
