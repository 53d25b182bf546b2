from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Optional

from ..core.exceptions import PersistenceError
from .repository import SnapshotRepository


class FileSnapshotRepository(SnapshotRepository):
    """Local JSON cache, one file per user key.

    Used as the secondary store when the primary backend is unreachable, and
    as the only store in development.
    """

    def __init__(self, directory: str | Path):
        self._dir = Path(directory)

    def _path(self, user_key: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9_.-]", "_", user_key) or "_"
        return self._dir / f"{safe}.json"

    def load(self, user_key: str) -> Optional[dict]:
        path = self._path(user_key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise PersistenceError(f"Could not read {path}") from e

    def save(self, user_key: str, document: dict) -> None:
        path = self._path(user_key)
        tmp = path.with_suffix(".json.tmp")
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(document, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            raise PersistenceError(f"Could not write {path}") from e
