"""Create the `user_snapshots` table that backs the MySQL snapshot repository.

Reads DB_CONFIG from the settings module selected by APP_ENV and applies
database/schema.sql. Safe to rerun: the schema only uses CREATE TABLE IF NOT EXISTS.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.medattend.medattend.database.bootstrap import apply_schema, list_tables

SNAPSHOT_TABLE = "user_snapshots"


def main() -> int:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)
    target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"

    apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
    tables = list_tables(db_config)
    if SNAPSHOT_TABLE not in tables:
        print(f"ERROR: {SNAPSHOT_TABLE} missing after applying schema.sql on {target}", file=sys.stderr)
        return 1

    print(f"OK: {SNAPSHOT_TABLE} ready on {target} (tables={len(tables)})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
