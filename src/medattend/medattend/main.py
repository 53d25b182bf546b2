from __future__ import annotations

import atexit
import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .container import build_container
from .core.exceptions import DomainError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .eligibility.controller import register as register_eligibility
from .history.controller import register as register_history
from .integrations.assistant import Assistant
from .integrations.controller import register as register_integrations
from .integrations.timetable import TimetableRecognizer
from .postings.controller import register as register_postings
from .settings.controller import register as register_settings
from .state.controller import register as register_state
from .subjects.controller import register as register_subjects

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return jsonify({"error": e.description}), e.code


def create_app(
    overrides: Optional[dict] = None,
    *,
    recognizer: Optional[TimetableRecognizer] = None,
    assistant: Optional[Assistant] = None,
) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    for key in dir(settings):
        if key.isupper():
            app.config[key] = getattr(settings, key)
    app.config.update(overrides or {})
    app.secret_key = app.config["SECRET_KEY"]

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db_config = app.config["DB_CONFIG"]
    backend = app.config.get("PERSISTENCE_BACKEND", "file")
    logger.info("Starting medattend settings=%s backend=%s", settings_module, backend)

    if backend == "mysql" and app.config.get("AUTO_INIT_DB"):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(
        persistence_backend=backend,
        cache_dir=app.config["LOCAL_CACHE_DIR"],
        db_config=db_config,
        debounce_seconds=app.config.get("SAVE_DEBOUNCE_SECONDS", 1.0),
        recognizer=recognizer,
        assistant=assistant,
    )
    app.extensions["medattend"] = container
    atexit.register(container.sessions.close)

    _register_error_handlers(app)
    register_subjects(app, container)
    register_history(app, container)
    register_eligibility(app, container)
    register_postings(app, container)
    register_settings(app, container)
    register_state(app, container)
    register_integrations(app, container)

    return app
