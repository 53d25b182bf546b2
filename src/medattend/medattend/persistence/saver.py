from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from ..core.constants import DEFAULT_SAVE_DEBOUNCE_SECONDS, DEFAULT_SAVE_RETRIES
from ..core.exceptions import PersistenceError
from ..state.snapshot import Snapshot
from .repository import SnapshotRepository

logger = logging.getLogger(__name__)


class DebouncedSaver:
    """Coalesce rapid edits into one persisted write after a quiet period.

    Registered as a StateStore listener. In-memory state is already updated
    when this is called; the write happens later on a timer thread. A failed
    primary write is retried, then diverted to the fallback repository. Errors
    are logged and never reach the caller.
    """

    def __init__(
        self,
        user_key: str,
        primary: SnapshotRepository,
        *,
        fallback: Optional[SnapshotRepository] = None,
        delay: float = DEFAULT_SAVE_DEBOUNCE_SECONDS,
        retries: int = DEFAULT_SAVE_RETRIES,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ):
        self._user_key = user_key
        self._primary = primary
        self._fallback = fallback
        self._delay = float(delay)
        self._retries = max(0, int(retries))
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._pending: Optional[Snapshot] = None
        self._timer = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def __call__(self, snapshot: Snapshot) -> None:
        with self._lock:
            self._pending = snapshot
            if self._timer is not None:
                self._timer.cancel()
            self._timer = self._timer_factory(self._delay, self.flush)
            self._timer.daemon = True
            self._timer.start()

    def flush(self) -> bool:
        """Write the pending snapshot now. Returns True if the primary accepted it.

        Writes are serialized: a flush that starts while another is writing
        waits for it, so the newest snapshot is always the last one saved.
        """
        with self._write_lock:
            return self._flush_pending()

    def _flush_pending(self) -> bool:
        with self._lock:
            snapshot, self._pending = self._pending, None
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

        if snapshot is None:
            return True

        document = snapshot.to_dict()
        for attempt in range(1, self._retries + 2):
            try:
                self._primary.save(self._user_key, document)
                logger.debug("Saved snapshot for %s (attempt %d)", self._user_key, attempt)
                return True
            except PersistenceError as e:
                logger.warning("Save failed for %s (attempt %d): %s", self._user_key, attempt, e)

        if self._fallback is None:
            logger.error("Dropping unsaved changes for %s: no fallback store", self._user_key)
            return False

        try:
            self._fallback.save(self._user_key, document)
            logger.warning("Saved snapshot for %s to local cache", self._user_key)
        except PersistenceError:
            logger.exception("Local cache write failed for %s", self._user_key)
        return False
