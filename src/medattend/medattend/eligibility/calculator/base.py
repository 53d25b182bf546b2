from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import Eligibility


class EligibilityCalculator(ABC):
    """Calculator interface (Strategy Pattern for eligibility)."""

    @abstractmethod
    def evaluate(self, attended: int, total: int, required_percent: int) -> Eligibility:
        raise NotImplementedError
