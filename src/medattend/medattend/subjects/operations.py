"""Pure helpers for rewriting the subject tree inside a snapshot."""

from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Callable, Optional

from ..core.exceptions import NotFoundError
from ..state.snapshot import Snapshot
from .model import Subject, SubjectComponent


def new_id() -> str:
    return uuid.uuid4().hex


def find_component(snapshot: Snapshot, subject_id: str, component_id: str) -> tuple[Subject, SubjectComponent]:
    subject = snapshot.get_subject(subject_id)
    if not subject:
        raise NotFoundError(f"Subject {subject_id} not found")
    component = subject.get_component(component_id)
    if not component:
        raise NotFoundError(f"Component {component_id} not found in subject {subject_id}")
    return subject, component


def resolve_component(snapshot: Snapshot, subject_id: str, component_id: str) -> Optional[SubjectComponent]:
    """Like find_component, but returns None for orphaned references."""
    subject = snapshot.get_subject(subject_id)
    return subject.get_component(component_id) if subject else None


def with_subject(snapshot: Snapshot, subject_id: str, change: Callable[[Subject], Subject]) -> Snapshot:
    if not snapshot.get_subject(subject_id):
        raise NotFoundError(f"Subject {subject_id} not found")
    return replace(
        snapshot,
        subjects=tuple(change(s) if s.subject_id == subject_id else s for s in snapshot.subjects),
    )


def with_component(
    snapshot: Snapshot,
    subject_id: str,
    component_id: str,
    change: Callable[[SubjectComponent], SubjectComponent],
) -> Snapshot:
    find_component(snapshot, subject_id, component_id)

    def _change_subject(subject: Subject) -> Subject:
        return replace(
            subject,
            components=tuple(
                change(c) if c.component_id == component_id else c for c in subject.components
            ),
        )

    return with_subject(snapshot, subject_id, _change_subject)
