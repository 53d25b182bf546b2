from __future__ import annotations

from flask import Flask, request

from ..common.http import ok
from ..common.validators import clamp_count, clamp_percent
from ..container import Container
from .aggregator import evaluate


def register(app: Flask, container: Container) -> None:
    @app.route("/api/<user_key>/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard(user_key: str):
        return ok(container.for_user(user_key).dashboard.build())

    @app.route("/api/eligibility", methods=["GET"], endpoint="eligibility")
    def eligibility():
        """Stateless calculator: ?attended=&total=&requiredPercent="""
        result = evaluate(
            clamp_count(request.args.get("attended", 0), "attended"),
            clamp_count(request.args.get("total", 0), "total"),
            clamp_percent(request.args.get("requiredPercent", 75), "requiredPercent"),
        )
        return ok(result)
