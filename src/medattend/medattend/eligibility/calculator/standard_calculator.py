from __future__ import annotations

import math
from typing import Optional

from ...core.constants import BORDERLINE_FLOOR
from ...core.enums import RiskLevel
from ..model import Eligibility
from .base import EligibilityCalculator


def classify_risk(margin_units: int) -> RiskLevel:
    if margin_units < BORDERLINE_FLOOR:
        return RiskLevel.DANGER
    if margin_units < 0:
        return RiskLevel.BORDERLINE
    return RiskLevel.SAFE


class StandardEligibilityCalculator(EligibilityCalculator):
    """Standard rule: required = ceil(total * pct / 100), margin = attended - required.

    `units_needed` is the current deficit size. It is not re-solved for a total
    that grows with every attended session; see `units_to_recover_exact`.
    """

    def evaluate(self, attended: int, total: int, required_percent: int) -> Eligibility:
        if total <= 0:
            return Eligibility(margin_units=0, current_percent=0.0, units_needed=0, risk=RiskLevel.SAFE)

        current_percent = 100 * attended / total
        required_units = math.ceil(total * required_percent / 100)
        margin = attended - required_units

        return Eligibility(
            margin_units=margin,
            current_percent=current_percent,
            units_needed=max(0, -margin),
            risk=classify_risk(margin),
            required_units=required_units,
        )


def units_to_recover_exact(attended: int, total: int, required_percent: int) -> Optional[int]:
    """Minimum k with (attended + k) / (total + k) >= required_percent / 100.

    Informational only. Returns None when the threshold can never be reached
    (100% required with an absence already on record).
    """
    shortfall = required_percent * max(total, 0) - 100 * attended
    if shortfall <= 0:
        return 0
    if required_percent >= 100:
        return None
    return math.ceil(shortfall / (100 - required_percent))
