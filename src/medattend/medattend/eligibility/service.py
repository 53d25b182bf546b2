from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ComponentType, RiskLevel
from ..settings.service import theory_practical_targets
from ..state.snapshot import Snapshot
from ..state.store import StateStore
from ..subjects.model import Subject
from .aggregator import aggregate, pooled_percent
from .calculator.base import EligibilityCalculator
from .calculator.standard_calculator import StandardEligibilityCalculator, units_to_recover_exact
from .model import AggregateSummary, ComponentRow, SubjectRollup


@dataclass(frozen=True)
class TypeRollup:
    component_type: ComponentType
    target_percent: int
    summary: AggregateSummary


@dataclass(frozen=True)
class Dashboard:
    overall: AggregateSummary
    by_type: list[TypeRollup]
    subjects: list[SubjectRollup]
    danger: list[ComponentRow]


class DashboardService:
    """Read-only projections over the current registry state."""

    def __init__(self, store: StateStore, *, calculator: Optional[EligibilityCalculator] = None):
        self._store = store
        self._calculator = calculator or StandardEligibilityCalculator()

    def _rows(self, subject: Subject) -> list[ComponentRow]:
        rows = []
        for c in subject.components:
            rows.append(
                ComponentRow(
                    subject_id=subject.subject_id,
                    subject_name=subject.name,
                    component_id=c.component_id,
                    component_type=c.component_type,
                    attended=c.attended,
                    total=c.total,
                    required_percent=c.required_percent,
                    eligibility=self._calculator.evaluate(c.attended, c.total, c.required_percent),
                    exact_units_to_recover=units_to_recover_exact(c.attended, c.total, c.required_percent),
                )
            )
        return rows

    def subject_rollup(self, subject: Subject) -> SubjectRollup:
        rows = self._rows(subject)
        attended = sum(r.attended for r in rows)
        total = sum(r.total for r in rows)
        risks = [r.eligibility.risk for r in rows]

        if any(r == RiskLevel.DANGER for r in risks):
            risk = RiskLevel.DANGER
        elif all(r == RiskLevel.SAFE for r in risks):
            risk = RiskLevel.SAFE
        else:
            risk = RiskLevel.BORDERLINE

        return SubjectRollup(
            subject_id=subject.subject_id,
            subject_name=subject.name,
            attended=attended,
            total=total,
            percent=pooled_percent(attended, total),
            margin_units=sum(r.eligibility.margin_units for r in rows),
            risk=risk,
            components=rows,
        )

    def overall(self, snapshot: Optional[Snapshot] = None) -> AggregateSummary:
        snap = snapshot or self._store.snapshot
        components = [c for s in snap.subjects for c in s.components]
        return aggregate(components, calculator=self._calculator)

    def by_type(self, component_type: ComponentType, snapshot: Optional[Snapshot] = None) -> AggregateSummary:
        snap = snapshot or self._store.snapshot
        components = [
            c
            for s in snap.subjects
            for c in s.components
            if c.component_type == component_type
        ]
        return aggregate(components, calculator=self._calculator)

    def build(self) -> Dashboard:
        """Every section is computed from one snapshot read, so they agree."""
        snap = self._store.snapshot
        theory_target, practical_target = theory_practical_targets(snap.settings)
        subjects = [self.subject_rollup(s) for s in snap.subjects]

        return Dashboard(
            overall=self.overall(snap),
            by_type=[
                TypeRollup(ComponentType.THEORY, theory_target, self.by_type(ComponentType.THEORY, snap)),
                TypeRollup(ComponentType.PRACTICAL, practical_target, self.by_type(ComponentType.PRACTICAL, snap)),
            ],
            subjects=subjects,
            danger=[
                row
                for rollup in subjects
                for row in rollup.components
                if row.eligibility.risk == RiskLevel.DANGER
            ],
        )
