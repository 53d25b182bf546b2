"""Create the database and the snapshot table from database/schema.sql."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

_CREATE_OR_USE_DB = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b.*?;\s*$")
_LINE_COMMENT = re.compile(r"(?m)^\s*--.*$")


def schema_statements(sql: str) -> list[str]:
    """Split schema.sql into statements, dropping its own CREATE DATABASE/USE lines.

    The target database comes from DB_CONFIG instead, so one schema file serves
    every environment. The schema holds no string literals containing ';'.
    """
    sql = _LINE_COMMENT.sub("", _CREATE_OR_USE_DB.sub("", sql))
    return [stmt.strip() for stmt in sql.split(";") if stmt.strip()]


def _connect(config: DBConfig, *, with_database: bool = True):
    return mysql.connector.connect(use_pure=True, **config.connect_kwargs(with_database=with_database))


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    config = DBConfig.from_dict(db_config)
    statements = schema_statements(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        cur.execute(f"USE `{config.database}`")
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Applied %d schema statement(s) to %s", len(statements), config.database)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
