"""Snapshot: the whole persisted unit for one user.

The dict shape produced by `to_dict` is the stored document (camelCase keys,
dates as YYYY-MM-DD strings). It holds only primitives, lists and nested
records so it is JSON-serializable by construction.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.enums import ComponentType, EntryStatus, EntryType, StartMode
from ..core.exceptions import ValidationError
from ..history.model import AttendanceEntry
from ..postings.model import Posting
from ..settings.model import UserSettings
from ..subjects.model import Subject, SubjectComponent

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Snapshot:
    subjects: tuple[Subject, ...] = field(default_factory=tuple)
    postings: tuple[Posting, ...] = field(default_factory=tuple)
    history: tuple[AttendanceEntry, ...] = field(default_factory=tuple)
    settings: UserSettings = field(default_factory=UserSettings)

    @classmethod
    def empty(cls) -> "Snapshot":
        return cls()

    def get_subject(self, subject_id: str) -> Optional[Subject]:
        for s in self.subjects:
            if s.subject_id == subject_id:
                return s
        return None

    def to_dict(self) -> dict:
        return {
            "subjects": [_subject_to_dict(s) for s in self.subjects],
            "postings": [_posting_to_dict(p) for p in self.postings],
            "history": [_entry_to_dict(e) for e in self.history],
            "settings": _settings_to_dict(self.settings),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Snapshot":
        """Decode a stored document.

        Malformed subjects, components, postings and history entries are
        skipped with a warning. Only a document that is not a JSON object at
        all is rejected (ValueError).
        """
        if not data:
            return cls.empty()
        if not isinstance(data, dict):
            raise ValueError(f"Snapshot document must be an object, got {type(data).__name__}")

        settings = data.get("settings")
        return cls(
            subjects=_decode_all(data.get("subjects"), _subject_from_dict, "subject"),
            postings=_decode_all(data.get("postings"), _posting_from_dict, "posting"),
            history=_decode_all(data.get("history"), _entry_from_dict, "history entry"),
            settings=_settings_from_dict(settings if isinstance(settings, dict) else {}),
        )


_DECODE_ERRORS = (KeyError, TypeError, ValueError, AttributeError, ValidationError)


def _decode_all(items: Any, decode: Callable[[dict], T], label: str) -> tuple[T, ...]:
    if items is None:
        return ()
    if not isinstance(items, list):
        logger.warning("Ignoring %s list that is not a list: %r", label, items)
        return ()

    out = []
    for raw in items:
        try:
            out.append(decode(raw))
        except _DECODE_ERRORS:
            logger.warning("Skipping malformed %s: %r", label, raw)
    return tuple(out)


def _component_type(value: Any) -> ComponentType:
    try:
        return ComponentType(value)
    except (TypeError, ValueError):
        return ComponentType.THEORY


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _optional_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    if value is None:
        return None
    return _int(value, default)


def _bool(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _subject_to_dict(s: Subject) -> dict:
    return {
        "id": s.subject_id,
        "name": s.name,
        "components": [
            {
                "id": c.component_id,
                "type": c.component_type.value,
                "attended": c.attended,
                "total": c.total,
                "requiredPct": c.required_percent,
                "isBaselineMode": c.is_baseline_seeded,
                **({"baselinePct": c.baseline_percent} if c.baseline_percent is not None else {}),
            }
            for c in s.components
        ],
    }


def _component_from_dict(c: dict) -> SubjectComponent:
    return SubjectComponent(
        component_id=str(c["id"]),
        component_type=_component_type(c.get("type")),
        attended=_int(c.get("attended")),
        total=_int(c.get("total")),
        required_percent=_int(c.get("requiredPct"), 75),
        is_baseline_seeded=_bool(c.get("isBaselineMode"), False),
        baseline_percent=_optional_int(c.get("baselinePct")),
    )


def _subject_from_dict(raw: dict) -> Subject:
    return Subject(
        subject_id=str(raw["id"]),
        name=str(raw.get("name", "")),
        components=_decode_all(raw.get("components"), _component_from_dict, "component"),
    )


def _posting_to_dict(p: Posting) -> dict:
    return {
        "id": p.posting_id,
        "department": p.department,
        "startDate": format_iso_date(p.start_date),
        "endDate": format_iso_date(p.end_date),
        "requiredDays": p.required_days,
        "attendedDays": p.attended_days,
    }


def _posting_from_dict(raw: dict) -> Posting:
    return Posting(
        posting_id=str(raw["id"]),
        department=str(raw.get("department", "")),
        start_date=parse_iso_date(raw["startDate"]),
        end_date=parse_iso_date(raw["endDate"]),
        required_days=_int(raw.get("requiredDays")),
        attended_days=_int(raw.get("attendedDays")),
    )


def _entry_to_dict(e: AttendanceEntry) -> dict:
    return {
        "id": e.entry_id,
        "subjectId": e.subject_id,
        "componentId": e.component_id,
        "subjectName": e.subject_name,
        "componentType": e.component_type,
        "date": format_iso_date(e.date),
        "status": e.status.value,
        "timestamp": e.created_at,
    }


def _entry_from_dict(raw: dict) -> AttendanceEntry:
    return AttendanceEntry(
        entry_id=str(raw["id"]),
        subject_id=str(raw["subjectId"]),
        component_id=str(raw["componentId"]),
        subject_name=str(raw.get("subjectName", "")),
        component_type=str(raw.get("componentType", "")),
        date=parse_iso_date(raw["date"]),
        status=EntryStatus(raw["status"]),
        created_at=_int(raw.get("timestamp")),
    )


def _settings_to_dict(s: UserSettings) -> dict:
    out = {
        "name": s.name,
        "bio": s.bio,
        "college": s.college,
        "year": s.year,
        "onboarded": s.onboarded,
        "startMode": s.start_mode.value,
        "defaultBaselinePct": s.default_baseline_percent,
        "defaultAttendedCount": s.default_attended_count,
        "defaultTotalCount": s.default_total_count,
        "entryType": s.entry_type.value,
        "isMYSY": s.is_scholarship,
        "remindersEnabled": s.reminders_enabled,
        "theme": s.theme,
    }
    if s.profile_photo:
        out["profilePhoto"] = s.profile_photo
    return out


def _settings_from_dict(raw: dict) -> UserSettings:
    defaults = UserSettings()
    try:
        start_mode = StartMode(raw.get("startMode", defaults.start_mode.value))
    except (TypeError, ValueError):
        start_mode = defaults.start_mode
    try:
        entry_type = EntryType(raw.get("entryType", defaults.entry_type.value))
    except (TypeError, ValueError):
        entry_type = defaults.entry_type
    photo = raw.get("profilePhoto")

    return UserSettings(
        name=str(raw.get("name", defaults.name) or ""),
        bio=str(raw.get("bio", defaults.bio) or ""),
        college=str(raw.get("college", defaults.college) or ""),
        year=str(raw.get("year", defaults.year) or defaults.year),
        onboarded=_bool(raw.get("onboarded"), defaults.onboarded),
        start_mode=start_mode,
        default_baseline_percent=_optional_int(
            raw.get("defaultBaselinePct", defaults.default_baseline_percent),
            defaults.default_baseline_percent,
        ),
        default_attended_count=_optional_int(
            raw.get("defaultAttendedCount", defaults.default_attended_count),
            defaults.default_attended_count,
        ),
        default_total_count=_optional_int(
            raw.get("defaultTotalCount", defaults.default_total_count),
            defaults.default_total_count,
        ),
        entry_type=entry_type,
        is_scholarship=_bool(raw.get("isMYSY"), defaults.is_scholarship),
        reminders_enabled=_bool(raw.get("remindersEnabled"), defaults.reminders_enabled),
        theme=str(raw.get("theme", defaults.theme) or defaults.theme),
        profile_photo=photo if isinstance(photo, str) else None,
    )
