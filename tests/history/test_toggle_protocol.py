from datetime import date
from itertools import count

import pytest

from src.medattend.medattend.core.enums import CellState, ComponentType, EntryStatus
from src.medattend.medattend.core.exceptions import NotFoundError
from src.medattend.medattend.history.commands import resolve_cell
from src.medattend.medattend.history.model import AttendanceEntry
from src.medattend.medattend.history.service import LedgerService
from src.medattend.medattend.state.snapshot import Snapshot
from src.medattend.medattend.state.store import StateStore
from src.medattend.medattend.subjects.model import Subject, SubjectComponent

DAY = date(2024, 3, 1)


def _store(attended=0, total=0, history=()):
    component = SubjectComponent("c1", ComponentType.THEORY, attended=attended, total=total, required_percent=75)
    return StateStore(Snapshot(subjects=(Subject("s1", "Pharmacology", (component,)),), history=tuple(history)))


def _ledger(store):
    ids = count(1)
    return LedgerService(store, id_factory=lambda: f"e{next(ids)}", clock=lambda: 1000)


def _counts(store):
    c = store.snapshot.subjects[0].components[0]
    return c.attended, c.total


def _entry(entry_id, status, created_at, subject_id="s1", component_id="c1", on=DAY):
    return AttendanceEntry(entry_id, subject_id, component_id, "Pharmacology", "Theory", on, status, created_at)


def test_toggle_cycle_keeps_held_session_counted():
    store = _store(attended=5, total=8)
    ledger = _ledger(store)

    assert ledger.toggle("s1", "c1", DAY).state == CellState.PRESENT
    assert _counts(store) == (6, 9)

    assert ledger.toggle("s1", "c1", DAY).state == CellState.ABSENT
    assert _counts(store) == (5, 9)
    assert [e.status for e in store.snapshot.history] == [EntryStatus.ABSENT]

    assert ledger.toggle("s1", "c1", DAY).state == CellState.NONE
    assert _counts(store) == (5, 9)
    assert store.snapshot.history == ()


def test_toggle_after_clearing_starts_cycle_again():
    store = _store()
    ledger = _ledger(store)
    for _ in range(4):
        view = ledger.toggle("s1", "c1", "2024-03-01")

    assert view.state == CellState.PRESENT
    assert _counts(store) == (1, 2)


def test_toggle_unknown_component_raises():
    with pytest.raises(NotFoundError):
        _ledger(_store()).toggle("s1", "missing", DAY)


def test_newest_entry_wins_for_duplicates():
    history = [_entry("old", EntryStatus.PRESENT, 100), _entry("new", EntryStatus.ABSENT, 200)]
    assert resolve_cell(history, "s1", "c1", DAY).entry_id == "new"

    tied = [_entry("first", EntryStatus.PRESENT, 100), _entry("second", EntryStatus.ABSENT, 100)]
    assert resolve_cell(tied, "s1", "c1", DAY).entry_id == "second"


def test_toggle_on_duplicate_cell_only_touches_resolved_entry():
    store = _store(attended=1, total=2, history=[_entry("old", EntryStatus.PRESENT, 100), _entry("new", EntryStatus.ABSENT, 200)])
    ledger = _ledger(store)

    view = ledger.toggle("s1", "c1", DAY)

    assert [e.entry_id for e in store.snapshot.history] == ["old"]
    assert view.state == CellState.PRESENT
    assert view.duplicate_count == 0
    assert _counts(store) == (1, 2)


def test_delete_present_entry_reverses_both_counters():
    store = _store(attended=3, total=4, history=[_entry("e", EntryStatus.PRESENT, 100)])
    _ledger(store).delete_entry("e")

    assert _counts(store) == (2, 3)
    assert store.snapshot.history == ()


def test_delete_absent_entry_only_reverses_total():
    store = _store(attended=3, total=4, history=[_entry("e", EntryStatus.ABSENT, 100)])
    _ledger(store).delete_entry("e")

    assert _counts(store) == (3, 3)


def test_delete_never_drops_counters_below_zero():
    store = _store(attended=0, total=0, history=[_entry("e", EntryStatus.PRESENT, 100)])
    _ledger(store).delete_entry("e")

    assert _counts(store) == (0, 0)


def test_delete_orphaned_entry_leaves_counters_alone():
    orphan = _entry("o", EntryStatus.PRESENT, 100, subject_id="gone")
    store = _store(attended=2, total=2, history=[orphan])
    ledger = _ledger(store)

    assert ledger.orphaned_entries() == [orphan]
    ledger.delete_entry("o")

    assert store.snapshot.history == ()
    assert _counts(store) == (2, 2)


def test_delete_unknown_entry_raises():
    with pytest.raises(NotFoundError):
        _ledger(_store()).delete_entry("nope")


def test_mark_absent_counts_a_held_session():
    store = _store(attended=2, total=2)
    entry = _ledger(store).mark("s1", "c1", DAY, "absent")

    assert entry.status == EntryStatus.ABSENT
    assert entry.subject_name == "Pharmacology"
    assert _counts(store) == (2, 3)
