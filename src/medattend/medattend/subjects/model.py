from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import ComponentType


@dataclass(frozen=True)
class SubjectComponent:
    """One trackable unit within a subject, e.g. Pharmacology / Practical."""

    component_id: str
    component_type: ComponentType
    attended: int = 0
    total: int = 0
    required_percent: int = 75
    is_baseline_seeded: bool = False
    baseline_percent: Optional[int] = None


@dataclass(frozen=True)
class Subject:
    subject_id: str
    name: str
    components: tuple[SubjectComponent, ...] = field(default_factory=tuple)

    def get_component(self, component_id: str) -> Optional[SubjectComponent]:
        for c in self.components:
            if c.component_id == component_id:
                return c
        return None


@dataclass(frozen=True)
class ComponentConfig:
    """Caller-chosen component for a new subject."""

    component_type: ComponentType
    required_percent: int
