"""Timetable image import.

The recognition itself is an external collaborator; this module only
normalizes the uploaded image, cleans up what comes back and turns it into
registry calls.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Sequence

from PIL import Image, UnidentifiedImageError

from ..core.constants import SUBJECT_ALIASES
from ..core.enums import ComponentType
from ..core.exceptions import ValidationError
from ..state.store import StateStore
from ..subjects.model import ComponentConfig, Subject
from ..subjects.service import RegistryService, required_percent_for

logger = logging.getLogger(__name__)

_MAX_EDGE = 2048


class TimetableRecognizer(Protocol):
    def recognize(self, image_base64: str) -> list[dict]:
        """Return [{"subjectName": str, "type": str, "frequencyPerWeek": int}, ...]."""
        raise NotImplementedError


@dataclass(frozen=True)
class RecognizedSubject:
    subject_name: str
    component_type: ComponentType
    weekly_frequency: int = 0


def normalize_image(payload) -> str:
    """Decode a base64 (or data-URL) image, check it is a real image and
    re-encode it as an RGB JPEG, base64 encoded."""
    if isinstance(payload, str):
        if payload.startswith("data:") and "," in payload:
            payload = payload.split(",", 1)[1]
        try:
            raw = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError):
            raise ValidationError("Image payload is not valid base64") from None
    else:
        raw = bytes(payload)

    try:
        with Image.open(io.BytesIO(raw)) as probe:
            probe.verify()
        with Image.open(io.BytesIO(raw)) as img:
            rgb = img.convert("RGB")
            rgb.thumbnail((_MAX_EDGE, _MAX_EDGE))
            out = io.BytesIO()
            rgb.save(out, format="JPEG", quality=90)
    except (UnidentifiedImageError, OSError):
        raise ValidationError("Uploaded file is not a readable image") from None

    return base64.b64encode(out.getvalue()).decode("ascii")


def canonical_subject_name(name: str) -> str:
    name = (name or "").strip()
    for alias, canonical in SUBJECT_ALIASES.items():
        if alias.lower() == name.lower():
            return canonical
    return name


def _component_type(value) -> ComponentType:
    text = str(value or "").strip().lower()
    for t in ComponentType:
        if t.value.lower() == text:
            return t
    if text.startswith("prac"):
        return ComponentType.PRACTICAL
    return ComponentType.THEORY


def parse_recognized(rows: Iterable[dict]) -> list[RecognizedSubject]:
    out = []
    for row in rows or []:
        name = canonical_subject_name(row.get("subjectName", ""))
        if not name:
            logger.debug("Skipping recognized row without a subject name: %r", row)
            continue
        try:
            frequency = max(0, int(row.get("frequencyPerWeek") or 0))
        except (TypeError, ValueError):
            frequency = 0
        out.append(RecognizedSubject(name, _component_type(row.get("type")), frequency))
    return out


class TimetableImportService:
    def __init__(self, store: StateStore, registry: RegistryService, recognizer: Optional[TimetableRecognizer]):
        self._store = store
        self._registry = registry
        self._recognizer = recognizer

    def recognize(self, payload) -> list[RecognizedSubject]:
        if self._recognizer is None:
            raise ValidationError("Timetable recognition is not configured")
        image = normalize_image(payload)
        rows = self._recognizer.recognize(image)
        recognized = parse_recognized(rows)
        logger.info("Recognized %d timetable row(s)", len(recognized))
        return recognized

    def import_subjects(self, recognized: Sequence[RecognizedSubject]) -> list[Subject]:
        """One subject per distinct name, one component per distinct type."""
        is_scholarship = self._store.snapshot.settings.is_scholarship
        grouped: dict[str, list[ComponentType]] = {}
        for r in recognized:
            types = grouped.setdefault(r.subject_name, [])
            if r.component_type not in types:
                types.append(r.component_type)

        batch = [
            (name, [ComponentConfig(t, required_percent_for(t, is_scholarship=is_scholarship)) for t in types])
            for name, types in grouped.items()
        ]
        return self._registry.create_subjects(batch)

    def import_image(self, payload) -> list[Subject]:
        return self.import_subjects(self.recognize(payload))
