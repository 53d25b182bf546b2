from __future__ import annotations

import logging

from flask import Flask

from ..common.http import json_body, ok, require_fields
from ..container import Container
from ..core.exceptions import DomainError
from .timetable import parse_recognized

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/<user_key>/timetable/preview", methods=["POST"], endpoint="timetable_preview")
    def timetable_preview(user_key: str):
        data = json_body()
        require_fields(data, "image")
        importer = container.for_user(user_key).timetable_import
        try:
            recognized = importer.recognize(data["image"])
        except DomainError:
            raise
        except Exception:
            logger.exception("Timetable recognition failed")
            return ok({"error": "Could not read the timetable image"}, 502)
        return ok(recognized)

    @app.route("/api/<user_key>/timetable/import", methods=["POST"], endpoint="timetable_import")
    def timetable_import(user_key: str):
        """Import subjects from reviewed preview rows, or straight from an image."""
        data = json_body()
        importer = container.for_user(user_key).timetable_import
        if data.get("subjects") is not None:
            return ok(importer.import_subjects(parse_recognized(data["subjects"])), 201)

        require_fields(data, "image")
        try:
            subjects = importer.import_image(data["image"])
        except DomainError:
            raise
        except Exception:
            logger.exception("Timetable import failed")
            return ok({"error": "Could not read the timetable image"}, 502)
        return ok(subjects, 201)

    @app.route("/api/<user_key>/assistant", methods=["POST"], endpoint="assistant_ask")
    def assistant_ask(user_key: str):
        data = json_body()
        reply = container.for_user(user_key).assistant.ask(data.get("prompt", ""))
        return ok({"reply": reply})
