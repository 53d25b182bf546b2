from __future__ import annotations

from typing import Optional, Protocol


class SnapshotRepository(Protocol):
    """Load/save contract for the opaque per-user snapshot document.

    Implementations raise PersistenceError on failure.
    """

    def load(self, user_key: str) -> Optional[dict]:
        raise NotImplementedError

    def save(self, user_key: str, document: dict) -> None:
        raise NotImplementedError
