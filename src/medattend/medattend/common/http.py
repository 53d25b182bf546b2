from __future__ import annotations

from flask import jsonify, request
from werkzeug.exceptions import BadRequest

from .serializers import to_jsonable


def json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequest("Expected a JSON object")
    return data


def require_fields(data: dict, *names: str) -> None:
    missing = [n for n in names if data.get(n) in (None, "")]
    if missing:
        raise BadRequest(f"Missing field(s): {', '.join(missing)}")


def ok(payload, status: int = 200):
    return jsonify(to_jsonable(payload)), status
