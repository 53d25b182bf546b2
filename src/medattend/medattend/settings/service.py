from __future__ import annotations

from dataclasses import fields, replace

from ..common.validators import clamp_count, clamp_percent
from ..core.constants import (
    SCHOLARSHIP_PRACTICAL_PCT,
    SCHOLARSHIP_THEORY_PCT,
    STANDARD_PRACTICAL_PCT,
    STANDARD_THEORY_PCT,
)
from ..core.enums import EntryType, StartMode
from ..core.exceptions import ValidationError
from ..state.store import StateStore
from .model import UserSettings

_FIELDS = {f.name for f in fields(UserSettings)}
_BOOL_FIELDS = ("is_scholarship", "reminders_enabled", "onboarded")
_STR_FIELDS = ("name", "bio", "college", "year", "theme")


def theory_practical_targets(settings: UserSettings) -> tuple[int, int]:
    """Pooled dashboard targets for Theory and Practical."""
    if settings.is_scholarship:
        return SCHOLARSHIP_THEORY_PCT, SCHOLARSHIP_PRACTICAL_PCT
    return STANDARD_THEORY_PCT, STANDARD_PRACTICAL_PCT


class SettingsService:
    def __init__(self, store: StateStore):
        self._store = store

    def get(self) -> UserSettings:
        return self._store.snapshot.settings

    def update(self, **changes) -> UserSettings:
        unknown = set(changes) - _FIELDS
        if unknown:
            raise ValidationError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

        if "start_mode" in changes:
            changes["start_mode"] = _enum(StartMode, changes["start_mode"], "start_mode")
        if "entry_type" in changes:
            changes["entry_type"] = _enum(EntryType, changes["entry_type"], "entry_type")
        for key in _BOOL_FIELDS:
            if key in changes and not isinstance(changes[key], bool):
                raise ValidationError(f"{key} must be true or false, got {changes[key]!r}")
        for key in _STR_FIELDS:
            if key in changes:
                changes[key] = _text(changes[key], key)
        if changes.get("profile_photo") is not None:
            changes["profile_photo"] = _text(changes["profile_photo"], "profile_photo")
        if changes.get("default_baseline_percent") is not None:
            changes["default_baseline_percent"] = clamp_percent(changes["default_baseline_percent"])
        for key in ("default_attended_count", "default_total_count"):
            if changes.get(key) is not None:
                changes[key] = clamp_count(changes[key], key)

        snap = self._store.apply(lambda s: replace(s, settings=replace(s.settings, **changes)))
        return snap.settings

    def required_percent_defaults(self) -> tuple[int, int]:
        return theory_practical_targets(self.get())

    def complete_onboarding(self, **changes) -> UserSettings:
        return self.update(**dict(changes, onboarded=True))


def _enum(enum_cls, value, name: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Invalid {name}: {value!r}") from None


def _text(value, name: str) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list, bool)):
        raise ValidationError(f"{name} must be text, got {value!r}")
    return str(value).strip()
