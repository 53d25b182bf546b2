from __future__ import annotations

import logging
import threading
from typing import Optional

from ..core.constants import DEFAULT_SAVE_DEBOUNCE_SECONDS
from ..core.exceptions import PersistenceError
from ..state.snapshot import Snapshot
from ..state.store import StateStore
from .repository import SnapshotRepository
from .saver import DebouncedSaver

logger = logging.getLogger(__name__)


class SessionManager:
    """Open one StateStore per user key and keep it authoritative in memory.

    Loading tries the primary repository, then the local cache, then starts
    from an empty snapshot. A source that is down or holds an unreadable
    document is skipped, so a session is never refused.
    """

    def __init__(
        self,
        primary: SnapshotRepository,
        *,
        fallback: Optional[SnapshotRepository] = None,
        debounce_seconds: float = DEFAULT_SAVE_DEBOUNCE_SECONDS,
        saver_factory=DebouncedSaver,
    ):
        self._primary = primary
        self._fallback = fallback
        self._debounce_seconds = float(debounce_seconds)
        self._saver_factory = saver_factory
        self._lock = threading.Lock()
        self._stores: dict[str, StateStore] = {}
        self._savers: dict[str, DebouncedSaver] = {}

    def _decode_from(self, repo: SnapshotRepository, user_key: str, source: str) -> Optional[Snapshot]:
        try:
            document = repo.load(user_key)
        except PersistenceError as e:
            logger.warning("%s load failed for %s: %s", source, user_key, e)
            return None
        if document is None:
            return None

        try:
            return Snapshot.from_dict(document)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("%s document for %s is unreadable: %s", source, user_key, e)
            return None

    def _load_snapshot(self, user_key: str) -> Snapshot:
        snapshot = self._decode_from(self._primary, user_key, "Primary")
        if snapshot is None and self._fallback is not None:
            snapshot = self._decode_from(self._fallback, user_key, "Local cache")
            if snapshot is not None:
                logger.info("Loaded %s from local cache", user_key)
        if snapshot is None:
            logger.info("Starting %s from an empty snapshot", user_key)
            return Snapshot.empty()
        return snapshot

    def open(self, user_key: str) -> StateStore:
        with self._lock:
            store = self._stores.get(user_key)
            if store is not None:
                return store

            store = StateStore(self._load_snapshot(user_key))
            saver = self._saver_factory(
                user_key,
                self._primary,
                fallback=self._fallback,
                delay=self._debounce_seconds,
            )
            store.subscribe(saver)
            self._stores[user_key] = store
            self._savers[user_key] = saver
            return store

    def reload(self, user_key: str) -> StateStore:
        """Re-read from storage, keeping the in-memory snapshot if that fails."""
        store = self.open(user_key)
        snapshot = self._decode_from(self._primary, user_key, "Reload")
        if snapshot is None:
            logger.info("Keeping in-memory state for %s", user_key)
            return store
        store.replace(snapshot)
        return store

    def flush(self, user_key: Optional[str] = None) -> bool:
        """Write pending changes now. False if any write only reached the fallback."""
        keys = [user_key] if user_key else list(self._savers)
        saved = True
        for key in keys:
            saver = self._savers.get(key)
            if saver is not None:
                saved = saver.flush() and saved
        return saved

    def close(self) -> None:
        self.flush()
