from __future__ import annotations

import json
from typing import Optional

import mysql.connector

from ..core.exceptions import PersistenceError
from ..database.connection import DatabaseConnection
from .repository import SnapshotRepository


class MySQLSnapshotRepository(SnapshotRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load(self, user_key: str) -> Optional[dict]:
        try:
            with self._conn_factory.cursor() as cur:
                cur.execute("SELECT document FROM user_snapshots WHERE user_key=%s", (user_key,))
                row = cur.fetchone()
        except mysql.connector.Error as e:
            raise PersistenceError(f"Could not load snapshot for {user_key}") from e

        if not row:
            return None
        try:
            return json.loads(row["document"])
        except ValueError as e:
            raise PersistenceError(f"Stored snapshot for {user_key} is not valid JSON") from e

    def save(self, user_key: str, document: dict) -> None:
        payload = json.dumps(document, ensure_ascii=False)
        try:
            with self._conn_factory.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO user_snapshots(user_key, document)
                    VALUES(%s, %s)
                    ON DUPLICATE KEY UPDATE document=VALUES(document)
                    """,
                    (user_key, payload),
                )
        except mysql.connector.Error as e:
            raise PersistenceError(f"Could not save snapshot for {user_key}") from e
