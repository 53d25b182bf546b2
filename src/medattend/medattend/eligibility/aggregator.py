"""Rollups over many components.

Percentages are always pooled (sum attended / sum held), never an average of
per-component percentages, so a 10-session practical does not weigh the same
as a 90-session theory block.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..core.constants import (
    SCORE_DANGER_PENALTY,
    SCORE_LOW_POOLED_PENALTY,
    SCORE_LOW_POOLED_THRESHOLD,
    SCORE_MAX,
)
from ..core.enums import RiskLevel
from ..subjects.model import SubjectComponent
from .calculator.base import EligibilityCalculator
from .calculator.standard_calculator import StandardEligibilityCalculator
from .model import AggregateSummary

_default_calculator = StandardEligibilityCalculator()


def evaluate(attended: int, total: int, required_percent: int):
    """Shared entry point so risk is computed one way everywhere."""
    return _default_calculator.evaluate(attended, total, required_percent)


def pooled_percent(attended: int, total: int) -> float:
    return 100 * attended / total if total > 0 else 0.0


def eligibility_score(danger_count: int, percent: float) -> int:
    """Heuristic 0..100 presentation metric, not a regulatory figure."""
    penalty = SCORE_DANGER_PENALTY * danger_count
    if danger_count == 0 and percent < SCORE_LOW_POOLED_THRESHOLD:
        penalty += SCORE_LOW_POOLED_PENALTY
    return max(0, SCORE_MAX - penalty)


def aggregate(
    components: Iterable[SubjectComponent],
    *,
    calculator: Optional[EligibilityCalculator] = None,
) -> AggregateSummary:
    calc = calculator or _default_calculator

    attended = total = safe_units = deficit_units = 0
    counts = {RiskLevel.SAFE: 0, RiskLevel.BORDERLINE: 0, RiskLevel.DANGER: 0}

    for c in components:
        result = calc.evaluate(c.attended, c.total, c.required_percent)
        attended += c.attended
        total += c.total
        if result.margin_units > 0:
            safe_units += result.margin_units
        elif result.margin_units < 0:
            deficit_units += -result.margin_units
        counts[result.risk] += 1

    percent = pooled_percent(attended, total)
    return AggregateSummary(
        attended=attended,
        total=total,
        percent=percent,
        safe_units=safe_units,
        deficit_units=deficit_units,
        safe_count=counts[RiskLevel.SAFE],
        borderline_count=counts[RiskLevel.BORDERLINE],
        danger_count=counts[RiskLevel.DANGER],
        eligibility_score=eligibility_score(counts[RiskLevel.DANGER], percent),
    )
