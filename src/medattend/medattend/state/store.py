from __future__ import annotations

import threading
from typing import Callable

from .snapshot import Snapshot

Listener = Callable[[Snapshot], None]


class StateStore:
    """Owns the current snapshot for one user.

    Every mutation goes through `apply`, which computes a new immutable snapshot
    and swaps it in under a lock, so a reader sees either the old or the new
    state and never a half-applied toggle. Listeners (the debounced saver) are
    notified inside the same lock, so they see snapshots in the order they
    were applied.
    """

    def __init__(self, snapshot: Snapshot | None = None):
        self._snapshot = snapshot or Snapshot.empty()
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def apply(self, mutate: Callable[[Snapshot], Snapshot]) -> Snapshot:
        with self._lock:
            current = self._snapshot
            updated = mutate(current)
            if updated is current:
                return current
            self._snapshot = updated
            for listener in list(self._listeners):
                listener(updated)
        return updated

    def replace(self, snapshot: Snapshot) -> Snapshot:
        return self.apply(lambda _: snapshot)

    def reset(self) -> Snapshot:
        return self.replace(Snapshot.empty())
