from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .database.connection import DBConfig, DatabaseConnection
from .eligibility.service import DashboardService
from .history.service import LedgerService
from .integrations.assistant import Assistant, AssistantService
from .integrations.timetable import TimetableImportService, TimetableRecognizer
from .persistence.file_snapshot_repository import FileSnapshotRepository
from .persistence.mysql_snapshot_repository import MySQLSnapshotRepository
from .persistence.repository import SnapshotRepository
from .persistence.session import SessionManager
from .postings.service import PostingService
from .settings.service import SettingsService
from .state.store import StateStore
from .subjects.service import RegistryService


@dataclass(frozen=True)
class UserServices:
    """Services bound to one user's StateStore."""

    store: StateStore
    registry: RegistryService
    ledger: LedgerService
    postings: PostingService
    settings: SettingsService
    dashboard: DashboardService
    timetable_import: TimetableImportService
    assistant: AssistantService


@dataclass(frozen=True)
class Container:
    sessions: SessionManager
    recognizer: Optional[TimetableRecognizer] = None
    assistant: Optional[Assistant] = None

    def for_user(self, user_key: str) -> UserServices:
        return build_user_services(
            self.sessions.open(user_key),
            recognizer=self.recognizer,
            assistant=self.assistant,
        )


def build_user_services(
    store: StateStore,
    *,
    recognizer: Optional[TimetableRecognizer] = None,
    assistant: Optional[Assistant] = None,
) -> UserServices:
    registry = RegistryService(store)
    return UserServices(
        store=store,
        registry=registry,
        ledger=LedgerService(store),
        postings=PostingService(store),
        settings=SettingsService(store),
        dashboard=DashboardService(store),
        timetable_import=TimetableImportService(store, registry, recognizer),
        assistant=AssistantService(store, assistant),
    )


def build_container(
    *,
    persistence_backend: str,
    cache_dir: str,
    db_config: Optional[dict] = None,
    debounce_seconds: float = 1.0,
    recognizer: Optional[TimetableRecognizer] = None,
    assistant: Optional[Assistant] = None,
) -> Container:
    cache = FileSnapshotRepository(cache_dir)

    primary: SnapshotRepository
    fallback: Optional[SnapshotRepository]
    if persistence_backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        primary, fallback = MySQLSnapshotRepository(conn), cache
    elif persistence_backend == "file":
        primary, fallback = cache, None
    else:
        raise ValueError(f"Unknown persistence backend: {persistence_backend!r}")

    sessions = SessionManager(primary, fallback=fallback, debounce_seconds=debounce_seconds)
    return Container(sessions=sessions, recognizer=recognizer, assistant=assistant)
