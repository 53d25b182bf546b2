"""Export one user's snapshot to backups/ as JSON.

Reads through the configured persistence backend, so it works for both the
MySQL store and the local file cache:

    python scripts/backup.py <user_key>
"""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.medattend.medattend.container import build_container


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_key")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    container = build_container(
        persistence_backend=settings.PERSISTENCE_BACKEND,
        cache_dir=settings.LOCAL_CACHE_DIR,
        db_config=settings.DB_CONFIG,
    )
    snapshot = container.sessions.open(args.user_key).snapshot

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"MedAttend_Backup_{args.user_key}_{ts}.json"
    out_file.write_text(json.dumps(snapshot.to_dict(), indent=2), encoding="utf-8")
    print(f"OK: Backup created: {out_file} (subjects={len(snapshot.subjects)}, history={len(snapshot.history)})")


if __name__ == "__main__":
    main()
