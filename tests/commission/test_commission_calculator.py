from __future__ import annotations

from datetime import date, datetime

import pytest

from src.tailor_payroll.tailor_payroll.commission.calculator import (
    CommissionCalculator,
    quality_factor,
    time_factor,
)
from src.tailor_payroll.tailor_payroll.commission.model import CommissionInput
from src.tailor_payroll.tailor_payroll.core.enums import BonusStatus, BonusType, CalculationType, PeriodType
from src.tailor_payroll.tailor_payroll.core.exceptions import RuleNotFoundError
from tests.fakes import InMemoryBonuses, InMemoryCommissionRules, make_rule


def _order(order_id="O-1", **overrides) -> CommissionInput:
    values = dict(
        order_id=order_id,
        employee_id="E1",
        order_type="SUIT",
        order_amount=1000.0,
        complexity_factor=1.0,
        completion_days=10,
        delivery_days=10,
        quality_score=95,
    )
    values.update(overrides)
    return CommissionInput(**values)


def _calc(*rules, bonuses=None) -> CommissionCalculator:
    return CommissionCalculator(InMemoryCommissionRules(rules), bonuses=bonuses)


def test_percentage_rule_on_time_high_quality():
    calc = _calc(make_rule(base_percentage=10, quality_bonus=0.1))

    result = calc.calculate(_order())

    assert result.base_commission == pytest.approx(100)
    assert result.complexity_bonus == 0
    assert result.time_bonus == 0
    assert result.quality_bonus == pytest.approx(100 * 0.1)
    assert result.total_commission == pytest.approx(110)


def test_fixed_rule_ignores_order_amount():
    calc = _calc(make_rule(calculation_type=CalculationType.FIXED, base_percentage=None, fixed_amount=75))

    result = calc.calculate(_order(order_amount=99999, quality_score=None))

    assert result.base_commission == pytest.approx(75)
    assert result.trace.fixed_part == pytest.approx(75)


def test_hybrid_rule_adds_percentage_and_fixed_parts():
    calc = _calc(make_rule(calculation_type=CalculationType.HYBRID, base_percentage=5, fixed_amount=20))

    result = calc.calculate(_order(quality_score=None))

    assert result.base_commission == pytest.approx(70)
    assert result.trace.percentage_part == pytest.approx(50)
    assert result.trace.fixed_part == pytest.approx(20)


def test_tiered_rule_is_flat_ten_percent():
    calc = _calc(make_rule(calculation_type=CalculationType.TIERED, base_percentage=None, conditions={"tiers": []}))

    result = calc.calculate(_order(quality_score=None))

    assert result.base_commission == pytest.approx(100)


def test_complexity_scales_base():
    calc = _calc(make_rule())

    result = calc.calculate(_order(complexity_factor=1.5, quality_score=None))

    assert result.complexity_bonus == pytest.approx(50)


def test_total_is_sum_of_parts():
    calc = _calc(make_rule(time_bonus_early=0.3, quality_bonus=0.2))

    result = calc.calculate(_order(complexity_factor=1.3, completion_days=6, delivery_days=10, quality_score=80))

    assert result.total_commission == pytest.approx(
        result.base_commission + result.complexity_bonus + result.time_bonus + result.quality_bonus
    )
    assert result.time_bonus > 0
    assert result.quality_bonus == pytest.approx(100 * 0.2 * 0.5)


@pytest.mark.parametrize(
    "completion, delivery, expected",
    [
        (0, 10, 0.5),
        (5, 10, 0.4),
        (10, 10, 0.0),
        (12, 10, -0.04),
        (100, 10, -0.3),
        (3, 0, 0.0),
    ],
)
def test_time_factor_is_clamped(completion, delivery, expected):
    rule = make_rule(time_bonus_early=0.8, time_penalty_delay=0.2)

    assert time_factor(completion, delivery, rule) == pytest.approx(expected)


@pytest.mark.parametrize("score, expected", [(95, 0.1), (90, 0.1), (75, 0.05), (70, 0.05), (50, 0.0)])
def test_quality_factor_tiers(score, expected):
    assert quality_factor(score, make_rule(quality_bonus=0.1)) == pytest.approx(expected)


def test_missing_rule_raises():
    calc = _calc(make_rule(order_type="DRESS"))

    with pytest.raises(RuleNotFoundError):
        calc.calculate(_order())


def test_inactive_rules_are_not_eligible():
    calc = _calc(make_rule(is_active=False))

    with pytest.raises(RuleNotFoundError):
        calc.calculate(_order())


def test_latest_created_rule_wins():
    older = make_rule(1, base_percentage=5, created_at=datetime(2024, 1, 1))
    newer = make_rule(2, base_percentage=12, created_at=datetime(2025, 3, 1))
    calc = _calc(older, newer)

    result = calc.calculate(_order(quality_score=None))

    assert result.rule_id == 2
    assert result.base_commission == pytest.approx(120)


def test_effective_window_selects_rule_for_order_date():
    old_policy = make_rule(
        1, base_percentage=5, created_at=datetime(2025, 6, 1), effective_to=date(2025, 1, 1)
    )
    new_policy = make_rule(
        2, base_percentage=8, created_at=datetime(2024, 12, 1), effective_from=date(2025, 1, 1)
    )
    calc = _calc(old_policy, new_policy)

    assert calc.find_rule(_order(order_date=date(2024, 6, 1))).rule_id == 1
    assert calc.find_rule(_order(order_date=date(2025, 1, 1))).rule_id == 2
    # without a date every active rule is eligible and the newest wins
    assert calc.find_rule(_order()).rule_id == 1


def test_bulk_skips_orders_without_rule():
    calc = _calc(make_rule())
    orders = [_order("O-1"), _order("O-2", order_type="CAPE"), _order("O-3")]

    batch = calc.calculate_bulk(orders)

    assert len(batch) == len(orders) - 1
    assert [r.order_id for r in batch.successes] == ["O-1", "O-3"]
    assert batch.failed_keys == ["O-2"]
    assert isinstance(batch.failures[0].error, RuleNotFoundError)


def test_generate_commission_bonus_records_pending_bonus():
    bonuses = InMemoryBonuses()
    calc = _calc(make_rule(rule_id=7), bonuses=bonuses)
    result = calc.calculate(_order())

    bonus = calc.generate_commission_bonus("E1", result, "2025-01", PeriodType.MONTHLY)

    assert bonus.bonus_type == BonusType.COMMISSION
    assert bonus.status == BonusStatus.PENDING
    assert bonus.amount == pytest.approx(result.total_commission)
    assert bonus.currency == "AED"
    assert bonus.commission_rule_id == 7
    assert bonus.calculation_basis["kind"] == "commission"
    assert bonuses.bonuses == [bonus]


def test_generate_commission_bonus_needs_bonus_repository():
    calc = _calc(make_rule())

    with pytest.raises(RuntimeError):
        calc.generate_commission_bonus("E1", calc.calculate(_order()), "2025-01", PeriodType.MONTHLY)
