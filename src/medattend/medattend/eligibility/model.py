from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ComponentType, RiskLevel


@dataclass(frozen=True)
class Eligibility:
    """Snapshot margin for one component at its current total."""

    margin_units: int
    current_percent: float
    units_needed: int
    risk: RiskLevel
    required_units: int = 0


@dataclass(frozen=True)
class AggregateSummary:
    attended: int
    total: int
    percent: float
    safe_units: int
    deficit_units: int
    safe_count: int
    borderline_count: int
    danger_count: int
    eligibility_score: int


@dataclass(frozen=True)
class ComponentRow:
    """Read-model for one component on the dashboard."""

    subject_id: str
    subject_name: str
    component_id: str
    component_type: ComponentType
    attended: int
    total: int
    required_percent: int
    eligibility: Eligibility
    exact_units_to_recover: Optional[int] = None


@dataclass(frozen=True)
class SubjectRollup:
    subject_id: str
    subject_name: str
    attended: int
    total: int
    percent: float
    margin_units: int
    risk: RiskLevel
    components: list[ComponentRow]
