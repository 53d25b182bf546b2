import pytest

from src.medattend.medattend.core.enums import RiskLevel
from src.medattend.medattend.eligibility.calculator.standard_calculator import (
    StandardEligibilityCalculator,
    classify_risk,
    units_to_recover_exact,
)


@pytest.fixture
def calc():
    return StandardEligibilityCalculator()


def test_no_sessions_held_is_safe(calc):
    result = calc.evaluate(0, 0, 75)

    assert result.margin_units == 0
    assert result.current_percent == 0.0
    assert result.units_needed == 0
    assert result.risk == RiskLevel.SAFE


def test_seventy_of_hundred_is_danger(calc):
    result = calc.evaluate(70, 100, 75)

    assert result.required_units == 75
    assert result.margin_units == -5
    assert result.units_needed == 5
    assert result.current_percent == 70.0
    assert result.risk == RiskLevel.DANGER


def test_one_unit_above_requirement_is_safe(calc):
    result = calc.evaluate(76, 100, 75)

    assert result.required_units == 75
    assert result.margin_units == 1
    assert result.units_needed == 0
    assert result.risk == RiskLevel.SAFE


def test_two_short_is_borderline(calc):
    result = calc.evaluate(73, 100, 75)

    assert result.margin_units == -2
    assert result.risk == RiskLevel.BORDERLINE


def test_risk_boundaries():
    assert classify_risk(-3) == RiskLevel.DANGER
    assert classify_risk(-2) == RiskLevel.BORDERLINE
    assert classify_risk(-1) == RiskLevel.BORDERLINE
    assert classify_risk(0) == RiskLevel.SAFE


def test_required_units_round_up(calc):
    # 75% of 10 sessions is 7.5, so 8 must be attended
    result = calc.evaluate(7, 10, 75)

    assert result.required_units == 8
    assert result.margin_units == -1


def test_evaluate_is_repeatable(calc):
    assert calc.evaluate(41, 57, 80) == calc.evaluate(41, 57, 80)


def test_exact_recovery_accounts_for_growing_total():
    # 70/100 at 75%: each attended session also adds one held session
    assert units_to_recover_exact(70, 100, 75) == 20
    assert units_to_recover_exact(80, 100, 75) == 0


def test_exact_recovery_impossible_at_full_requirement():
    assert units_to_recover_exact(9, 10, 100) is None
    assert units_to_recover_exact(10, 10, 100) == 0
