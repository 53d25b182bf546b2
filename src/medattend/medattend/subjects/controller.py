from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok, require_fields
from ..container import Container
from ..core.enums import ComponentType
from ..core.exceptions import ValidationError
from .model import ComponentConfig
from .service import default_component_configs, required_percent_for


def _parse_configs(raw, *, is_scholarship: bool) -> list[ComponentConfig]:
    if not raw:
        return default_component_configs(is_scholarship=is_scholarship)

    configs = []
    for item in raw:
        if not isinstance(item, dict):
            raise ValidationError("Each component must be an object with a type")
        try:
            component_type = ComponentType(item.get("type"))
        except ValueError:
            raise ValidationError(f"Unknown component type: {item.get('type')!r}") from None
        pct = item.get("requiredPct")
        if pct is None:
            pct = required_percent_for(component_type, is_scholarship=is_scholarship)
        configs.append(ComponentConfig(component_type, pct))
    return configs


def register(app: Flask, container: Container) -> None:
    @app.route("/api/<user_key>/subjects", methods=["GET"], endpoint="subjects_list")
    def subjects_list(user_key: str):
        services = container.for_user(user_key)
        return ok([services.dashboard.subject_rollup(s) for s in services.registry.list_subjects()])

    @app.route("/api/<user_key>/subjects", methods=["POST"], endpoint="subjects_create")
    def subjects_create(user_key: str):
        services = container.for_user(user_key)
        data = json_body()
        require_fields(data, "name")
        configs = _parse_configs(data.get("components"), is_scholarship=services.settings.get().is_scholarship)
        subject = services.registry.create_subject(data["name"], configs)
        return ok(subject, 201)

    @app.route("/api/<user_key>/subjects/<subject_id>", methods=["PATCH"], endpoint="subjects_rename")
    def subjects_rename(user_key: str, subject_id: str):
        data = json_body()
        require_fields(data, "name")
        return ok(container.for_user(user_key).registry.rename_subject(subject_id, data["name"]))

    @app.route("/api/<user_key>/subjects/<subject_id>", methods=["DELETE"], endpoint="subjects_delete")
    def subjects_delete(user_key: str, subject_id: str):
        container.for_user(user_key).registry.delete_subject(subject_id)
        return ok({"deleted": subject_id})

    @app.route(
        "/api/<user_key>/subjects/<subject_id>/components/<component_id>/counts",
        methods=["PUT"],
        endpoint="components_counts",
    )
    def components_counts(user_key: str, subject_id: str, component_id: str):
        data = json_body()
        require_fields(data, "attended", "total")
        component = container.for_user(user_key).registry.update_component_counts(
            subject_id, component_id, data["attended"], data["total"]
        )
        return ok(component)

    @app.route(
        "/api/<user_key>/subjects/<subject_id>/components/<component_id>/criteria",
        methods=["PUT"],
        endpoint="components_criteria",
    )
    def components_criteria(user_key: str, subject_id: str, component_id: str):
        data = json_body()
        require_fields(data, "requiredPct")
        component = container.for_user(user_key).registry.update_required_percent(
            subject_id, component_id, data["requiredPct"]
        )
        return ok(component)
