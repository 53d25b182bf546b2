from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional, Sequence

from ..common.validators import clamp_count, clamp_percent, require_non_empty
from ..core.constants import (
    BASELINE_TOTAL,
    DEFAULT_BASELINE_PCT,
    DEFAULT_REQUIRED_PCT,
    SCHOLARSHIP_PRACTICAL_PCT,
    SCHOLARSHIP_THEORY_PCT,
    STANDARD_PRACTICAL_PCT,
    STANDARD_THEORY_PCT,
)
from ..core.enums import ComponentType, EntryType, StartMode
from ..core.exceptions import NotFoundError, ValidationError
from ..settings.model import UserSettings
from ..state.snapshot import Snapshot
from ..state.store import StateStore
from .model import ComponentConfig, Subject, SubjectComponent
from .operations import find_component, new_id, with_component, with_subject

logger = logging.getLogger(__name__)


def required_percent_for(component_type: ComponentType, *, is_scholarship: bool) -> int:
    if component_type == ComponentType.THEORY:
        return SCHOLARSHIP_THEORY_PCT if is_scholarship else STANDARD_THEORY_PCT
    if component_type == ComponentType.PRACTICAL:
        return SCHOLARSHIP_PRACTICAL_PCT if is_scholarship else STANDARD_PRACTICAL_PCT
    return DEFAULT_REQUIRED_PCT[component_type]


def default_component_configs(*, is_scholarship: bool) -> list[ComponentConfig]:
    """Standard Theory + Practical pair offered for a new subject."""
    return [
        ComponentConfig(t, required_percent_for(t, is_scholarship=is_scholarship))
        for t in (ComponentType.THEORY, ComponentType.PRACTICAL)
    ]


def seed_component(config: ComponentConfig, settings: UserSettings, component_id: str) -> SubjectComponent:
    """Build a new component, pre-filled from settings when starting mid-term."""
    attended = total = 0
    baseline_percent = None
    seeded = settings.start_mode == StartMode.CURRENT

    if seeded:
        if settings.entry_type == EntryType.COUNTS:
            attended = clamp_count(settings.default_attended_count or 0)
            total = clamp_count(settings.default_total_count or 0)
        else:
            baseline_percent = clamp_percent(settings.default_baseline_percent or DEFAULT_BASELINE_PCT)
            attended = baseline_percent
            total = BASELINE_TOTAL

    return SubjectComponent(
        component_id=component_id,
        component_type=ComponentType(config.component_type),
        attended=attended,
        total=total,
        required_percent=clamp_percent(config.required_percent),
        is_baseline_seeded=seeded,
        baseline_percent=baseline_percent,
    )


class RegistryService:
    """Use case: own the set of tracked subjects and their components."""

    def __init__(self, store: StateStore, *, id_factory: Optional[Callable[[], str]] = None):
        self._store = store
        self._new_id = id_factory or new_id

    def list_subjects(self) -> Sequence[Subject]:
        return self._store.snapshot.subjects

    def get_subject(self, subject_id: str) -> Subject:
        subject = self._store.snapshot.get_subject(subject_id)
        if not subject:
            raise NotFoundError(f"Subject {subject_id} not found")
        return subject

    def _build_subject(self, name: str, configs: Sequence[ComponentConfig], settings: UserSettings) -> Subject:
        name = require_non_empty(name, "Subject name")
        if not configs:
            raise ValidationError("A subject needs at least one component")
        return Subject(
            subject_id=self._new_id(),
            name=name,
            components=tuple(seed_component(cfg, settings, self._new_id()) for cfg in configs),
        )

    def create_subject(self, name: str, component_configs: Sequence[ComponentConfig]) -> Subject:
        return self.create_subjects([(name, component_configs)])[0]

    def create_subjects(self, batch: Sequence[tuple[str, Sequence[ComponentConfig]]]) -> list[Subject]:
        """Create several subjects in one state update (used by timetable import)."""
        settings = self._store.snapshot.settings
        created = [self._build_subject(name, configs, settings) for name, configs in batch]
        if not created:
            return []

        self._store.apply(lambda snap: replace(snap, subjects=snap.subjects + tuple(created)))
        logger.info("Created %d subject(s)", len(created))
        return created

    def update_component_counts(self, subject_id: str, component_id: str, attended, total) -> SubjectComponent:
        attended = clamp_count(attended, "Attended")
        total = clamp_count(total, "Total")
        snap = self._store.apply(
            lambda s: with_component(s, subject_id, component_id, lambda c: replace(c, attended=attended, total=total))
        )
        return find_component(snap, subject_id, component_id)[1]

    def update_required_percent(self, subject_id: str, component_id: str, required_percent) -> SubjectComponent:
        pct = clamp_percent(required_percent, "Required percent")
        snap = self._store.apply(
            lambda s: with_component(s, subject_id, component_id, lambda c: replace(c, required_percent=pct))
        )
        return find_component(snap, subject_id, component_id)[1]

    def rename_subject(self, subject_id: str, name: str) -> Subject:
        name = require_non_empty(name, "Subject name")
        snap = self._store.apply(lambda s: with_subject(s, subject_id, lambda subj: replace(subj, name=name)))
        return snap.get_subject(subject_id)

    def delete_subject(self, subject_id: str) -> None:
        """Remove the subject and its components; history entries stay as orphans."""

        def _delete(snap: Snapshot) -> Snapshot:
            if not snap.get_subject(subject_id):
                raise NotFoundError(f"Subject {subject_id} not found")
            return replace(snap, subjects=tuple(s for s in snap.subjects if s.subject_id != subject_id))

        self._store.apply(_delete)
