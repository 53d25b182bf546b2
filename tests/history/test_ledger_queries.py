from datetime import date
from itertools import count

import pytest

from src.medattend.medattend.core.enums import ComponentType, DayState, EntryStatus
from src.medattend.medattend.core.exceptions import ValidationError
from src.medattend.medattend.history.service import LedgerService
from src.medattend.medattend.state.snapshot import Snapshot
from src.medattend.medattend.state.store import StateStore
from src.medattend.medattend.subjects.model import Subject, SubjectComponent


def _ledger():
    components = (
        SubjectComponent("t", ComponentType.THEORY, required_percent=75),
        SubjectComponent("p", ComponentType.PRACTICAL, required_percent=80),
    )
    store = StateStore(Snapshot(subjects=(Subject("s1", "Anatomy", components),)))
    ids = count(1)
    return LedgerService(store, id_factory=lambda: f"e{next(ids)}", clock=lambda: 1000)


def test_timestamps_strictly_increase_with_a_frozen_clock():
    ledger = _ledger()
    first = ledger.mark("s1", "t", "2024-02-01", EntryStatus.PRESENT)
    second = ledger.mark("s1", "p", "2024-02-01", EntryStatus.PRESENT)

    assert second.created_at > first.created_at


def test_recent_is_newest_first_and_limited():
    ledger = _ledger()
    for day in (1, 2, 3):
        ledger.mark("s1", "t", date(2024, 2, day), EntryStatus.PRESENT)

    recent = ledger.recent(limit=2)

    assert [e.date.day for e in recent] == [3, 2]


def test_day_summary_states():
    ledger = _ledger()
    ledger.mark("s1", "t", "2024-02-01", EntryStatus.PRESENT)
    ledger.mark("s1", "p", "2024-02-01", EntryStatus.ABSENT)
    ledger.mark("s1", "t", "2024-02-02", EntryStatus.ABSENT)
    ledger.mark("s1", "t", "2024-02-03", EntryStatus.PRESENT)

    assert ledger.day_summary("2024-02-01").state == DayState.MIXED
    assert ledger.day_summary("2024-02-02").state == DayState.MISSED
    assert ledger.day_summary("2024-02-03").state == DayState.FULL
    assert ledger.day_summary("2024-02-04").state == DayState.OFF


def test_month_summary_covers_every_day():
    ledger = _ledger()
    ledger.mark("s1", "t", "2024-02-10", EntryStatus.PRESENT)
    ledger.mark("s1", "t", "2024-03-01", EntryStatus.PRESENT)

    days = ledger.month_summary(2024, 2)

    assert len(days) == 29
    assert days[9].state == DayState.FULL
    assert days[9].present_count == 1
    assert sum(1 for d in days if d.state == DayState.OFF) == 28


def test_entries_for_component_are_chronological():
    ledger = _ledger()
    ledger.mark("s1", "t", "2024-02-05", EntryStatus.PRESENT)
    ledger.mark("s1", "t", "2024-02-01", EntryStatus.ABSENT)
    ledger.mark("s1", "p", "2024-02-03", EntryStatus.PRESENT)

    entries = ledger.entries_for_component("s1", "t")

    assert [e.date.day for e in entries] == [1, 5]


def test_recent_with_negative_limit_is_empty():
    ledger = _ledger()
    for day in (1, 2, 3):
        ledger.mark("s1", "t", date(2024, 2, day), EntryStatus.PRESENT)

    assert ledger.recent(limit=-1) == []


@pytest.mark.parametrize("year, month", [(0, 1), (10000, 1), (2024, 0), (2024, 13)])
def test_month_summary_rejects_out_of_range(year, month):
    with pytest.raises(ValidationError):
        _ledger().month_summary(year, month)
