from dataclasses import replace
from functools import partial

import pytest

from src.medattend.medattend.persistence.saver import DebouncedSaver
from src.medattend.medattend.persistence.session import SessionManager
from src.medattend.medattend.state.snapshot import Snapshot

DOC = {"subjects": [{"id": "s1", "name": "Anatomy", "components": []}]}


@pytest.fixture
def sessions_for(timers):
    def _build(primary, fallback=None):
        return SessionManager(primary, fallback=fallback, saver_factory=partial(DebouncedSaver, timer_factory=timers))

    return _build


def test_open_loads_from_primary_and_caches_store(memory_repo, sessions_for):
    sessions = sessions_for(memory_repo({"u1": DOC}))

    store = sessions.open("u1")

    assert store.snapshot.subjects[0].name == "Anatomy"
    assert sessions.open("u1") is store


def test_open_uses_local_cache_when_primary_is_down(memory_repo, sessions_for):
    sessions = sessions_for(memory_repo(fail_loads=True), fallback=memory_repo({"u1": DOC}))

    assert sessions.open("u1").snapshot.subjects[0].subject_id == "s1"


def test_open_uses_local_cache_when_primary_has_nothing(memory_repo, sessions_for):
    sessions = sessions_for(memory_repo(), fallback=memory_repo({"u1": DOC}))

    assert len(sessions.open("u1").snapshot.subjects) == 1


def test_open_starts_empty_when_nothing_is_stored(memory_repo, sessions_for):
    sessions = sessions_for(memory_repo(fail_loads=True), fallback=memory_repo(fail_loads=True))

    assert sessions.open("u1").snapshot == Snapshot.empty()


def test_mutations_are_written_on_flush(memory_repo, sessions_for):
    primary = memory_repo()
    sessions = sessions_for(primary)
    store = sessions.open("u1")

    store.apply(lambda s: replace(s, settings=replace(s.settings, name="Asha")))
    assert "u1" not in primary.docs

    assert sessions.flush("u1") is True
    assert primary.docs["u1"]["settings"]["name"] == "Asha"


def test_reload_keeps_memory_when_primary_fails(memory_repo, sessions_for):
    primary = memory_repo({"u1": DOC})
    sessions = sessions_for(primary)
    before = sessions.open("u1").snapshot

    primary.fail_loads = True

    assert sessions.reload("u1").snapshot is before


def test_reload_picks_up_stored_changes(memory_repo, sessions_for):
    primary = memory_repo({"u1": DOC})
    sessions = sessions_for(primary)
    sessions.open("u1")

    primary.docs["u1"] = {"subjects": []}

    assert sessions.reload("u1").snapshot.subjects == ()


def test_open_keeps_readable_parts_of_a_damaged_document(memory_repo, sessions_for):
    damaged = {
        "subjects": [
            {"name": "No id"},
            {"id": "s1", "name": "Anatomy", "components": [{"type": "Theory"}, {"id": "c1", "total": 4}]},
        ],
        "history": ["junk"],
    }
    sessions = sessions_for(memory_repo({"u1": damaged}))

    snapshot = sessions.open("u1").snapshot

    assert [s.subject_id for s in snapshot.subjects] == ["s1"]
    assert [c.total for c in snapshot.subjects[0].components] == [4]
    assert snapshot.history == ()


def test_open_uses_local_cache_when_primary_document_is_unreadable(memory_repo, sessions_for):
    sessions = sessions_for(memory_repo({"u1": ["not", "a", "document"]}), fallback=memory_repo({"u1": DOC}))

    assert sessions.open("u1").snapshot.subjects[0].name == "Anatomy"


def test_open_starts_empty_when_every_document_is_unreadable(memory_repo, sessions_for):
    sessions = sessions_for(memory_repo({"u1": "garbage"}), fallback=memory_repo({"u1": 42}))

    assert sessions.open("u1").snapshot == Snapshot.empty()


def test_reload_keeps_memory_when_stored_document_is_unreadable(memory_repo, sessions_for):
    primary = memory_repo({"u1": DOC})
    sessions = sessions_for(primary)
    before = sessions.open("u1").snapshot

    primary.docs["u1"] = ["garbage"]

    assert sessions.reload("u1").snapshot is before
