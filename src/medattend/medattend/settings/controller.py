from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok
from ..container import Container
from ..core.constants import MBBS_YEARS, PROF_SUBJECTS
from ..core.enums import ComponentType
from ..core.exceptions import ValidationError

# Wire names used by the client, mapped to UserSettings fields.
_WIRE_FIELDS = {
    "name": "name",
    "bio": "bio",
    "college": "college",
    "year": "year",
    "startMode": "start_mode",
    "defaultBaselinePct": "default_baseline_percent",
    "defaultAttendedCount": "default_attended_count",
    "defaultTotalCount": "default_total_count",
    "entryType": "entry_type",
    "isMYSY": "is_scholarship",
    "remindersEnabled": "reminders_enabled",
    "theme": "theme",
    "profilePhoto": "profile_photo",
}


def _changes(data: dict) -> dict:
    unknown = sorted(set(data) - set(_WIRE_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown setting(s): {', '.join(unknown)}")
    return {_WIRE_FIELDS[k]: v for k, v in data.items()}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/<user_key>/settings", methods=["GET"], endpoint="settings_get")
    def settings_get(user_key: str):
        return ok(container.for_user(user_key).settings.get())

    @app.route("/api/<user_key>/settings", methods=["PATCH"], endpoint="settings_update")
    def settings_update(user_key: str):
        return ok(container.for_user(user_key).settings.update(**_changes(json_body())))

    @app.route("/api/<user_key>/onboarding", methods=["POST"], endpoint="settings_onboarding")
    def settings_onboarding(user_key: str):
        return ok(container.for_user(user_key).settings.complete_onboarding(**_changes(json_body())))

    @app.route("/api/<user_key>/settings/targets", methods=["GET"], endpoint="settings_targets")
    def settings_targets(user_key: str):
        theory, practical = container.for_user(user_key).settings.required_percent_defaults()
        return ok({"theory": theory, "practical": practical})

    @app.route("/api/catalog", methods=["GET"], endpoint="catalog")
    def catalog():
        """Professional years, their subjects and the component types on offer."""
        return ok(
            {
                "years": MBBS_YEARS,
                "subjects": PROF_SUBJECTS,
                "componentTypes": [t.value for t in ComponentType],
            }
        )
