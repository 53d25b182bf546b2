from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok, require_fields
from ..container import Container
from ..core.enums import EntryStatus
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/<user_key>/history", methods=["GET"], endpoint="history_recent")
    def history_recent(user_key: str):
        limit = request.args.get("limit", 30, type=int)
        return ok(container.for_user(user_key).ledger.recent(limit))

    @app.route("/api/<user_key>/history/cell", methods=["GET"], endpoint="history_cell")
    def history_cell(user_key: str):
        args = request.args
        require_fields(args, "subjectId", "componentId", "date")
        return ok(container.for_user(user_key).ledger.cell_state(args["subjectId"], args["componentId"], args["date"]))

    @app.route("/api/<user_key>/history/toggle", methods=["POST"], endpoint="history_toggle")
    def history_toggle(user_key: str):
        data = json_body()
        require_fields(data, "subjectId", "componentId", "date")
        view = container.for_user(user_key).ledger.toggle(data["subjectId"], data["componentId"], data["date"])
        return ok(view)

    @app.route("/api/<user_key>/history", methods=["POST"], endpoint="history_mark")
    def history_mark(user_key: str):
        data = json_body()
        require_fields(data, "subjectId", "componentId", "date", "status")
        try:
            status = EntryStatus(data["status"])
        except ValueError:
            raise ValidationError(f"Unknown status: {data['status']!r}") from None
        entry = container.for_user(user_key).ledger.mark(data["subjectId"], data["componentId"], data["date"], status)
        return ok(entry, 201)

    @app.route("/api/<user_key>/history/<entry_id>", methods=["DELETE"], endpoint="history_delete")
    def history_delete(user_key: str, entry_id: str):
        container.for_user(user_key).ledger.delete_entry(entry_id)
        return ok({"deleted": entry_id})

    @app.route("/api/<user_key>/history/day/<day>", methods=["GET"], endpoint="history_day")
    def history_day(user_key: str, day: str):
        return ok(container.for_user(user_key).ledger.day_summary(day))

    @app.route("/api/<user_key>/history/month/<int:year>/<int:month>", methods=["GET"], endpoint="history_month")
    def history_month(user_key: str, year: int, month: int):
        days = container.for_user(user_key).ledger.month_summary(year, month)
        # Calendar grid only needs the colour bucket and counts per day.
        return ok(
            [
                {"date": d.date, "state": d.state, "present": d.present_count, "absent": d.absent_count}
                for d in days
            ]
        )

    @app.route("/api/<user_key>/history/orphans", methods=["GET"], endpoint="history_orphans")
    def history_orphans(user_key: str):
        return ok(container.for_user(user_key).ledger.orphaned_entries())
