from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok, require_fields
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/<user_key>/postings", methods=["GET"], endpoint="postings_list")
    def postings_list(user_key: str):
        rows = container.for_user(user_key).postings.overview()
        return ok([{"posting": p, "eligibility": e} for p, e in rows])

    @app.route("/api/<user_key>/postings", methods=["POST"], endpoint="postings_create")
    def postings_create(user_key: str):
        data = json_body()
        require_fields(data, "department")
        svc = container.for_user(user_key).postings
        posting = svc.add_posting(
            department=data["department"],
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            required_days=data.get("requiredDays", 12),
        )
        return ok({"posting": posting, "eligibility": svc.evaluate(posting.posting_id)}, 201)

    @app.route("/api/<user_key>/postings/<posting_id>/attended", methods=["PUT"], endpoint="postings_attended")
    def postings_attended(user_key: str, posting_id: str):
        data = json_body()
        require_fields(data, "attendedDays")
        svc = container.for_user(user_key).postings
        posting = svc.update_attended_days(posting_id, data["attendedDays"])
        return ok({"posting": posting, "eligibility": svc.evaluate(posting_id)})

    @app.route("/api/<user_key>/postings/<posting_id>", methods=["DELETE"], endpoint="postings_delete")
    def postings_delete(user_key: str, posting_id: str):
        container.for_user(user_key).postings.delete_posting(posting_id)
        return ok({"deleted": posting_id})
