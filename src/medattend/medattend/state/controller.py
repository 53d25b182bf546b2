from __future__ import annotations

import json

from flask import Flask, Response

from ..common.datetime_utils import format_iso_date, today_local
from ..common.http import json_body, ok
from ..container import Container
from ..core.exceptions import ValidationError
from .snapshot import Snapshot


def register(app: Flask, container: Container) -> None:
    @app.route("/api/<user_key>/snapshot", methods=["GET"], endpoint="snapshot_export")
    def snapshot_export(user_key: str):
        """Download the whole user document as a JSON backup file."""
        snap = container.for_user(user_key).store.snapshot
        filename = f"MedAttend_Backup_{format_iso_date(today_local())}.json"
        return Response(
            json.dumps(snap.to_dict(), indent=2),
            mimetype="application/json",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/<user_key>/snapshot", methods=["PUT"], endpoint="snapshot_restore")
    def snapshot_restore(user_key: str):
        store = container.for_user(user_key).store
        try:
            snapshot = Snapshot.from_dict(json_body())
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"Backup file is not a valid snapshot: {e}") from None
        restored = store.replace(snapshot)
        return ok(
            {
                "subjects": len(restored.subjects),
                "postings": len(restored.postings),
                "history": len(restored.history),
            }
        )

    @app.route("/api/<user_key>/snapshot", methods=["DELETE"], endpoint="snapshot_reset")
    def snapshot_reset(user_key: str):
        container.for_user(user_key).store.reset()
        return ok({"reset": True})

    @app.route("/api/<user_key>/sync", methods=["POST"], endpoint="snapshot_sync")
    def snapshot_sync(user_key: str):
        saved = container.sessions.flush(user_key)
        return ok({"saved": saved})
