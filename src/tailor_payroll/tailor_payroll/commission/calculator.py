from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..bonus.model import Bonus
from ..bonus.repository import BonusRepository
from ..common.outcome import BatchOutcome, run_isolated
from ..core.constants import (
    DEFAULT_COMPLEXITY_FACTOR,
    DEFAULT_CURRENCY,
    QUALITY_FULL_THRESHOLD,
    QUALITY_HALF_THRESHOLD,
    TIME_BONUS_CAP,
    TIME_PENALTY_CAP,
)
from ..core.enums import BonusStatus, BonusType, PeriodType
from ..core.exceptions import RuleNotFoundError
from .factory import CommissionStrategyFactory
from .model import CommissionInput, CommissionResult, CommissionRule, CommissionTrace
from .repository import CommissionRuleRepository

logger = logging.getLogger(__name__)


def time_factor(completion_days: int, delivery_days: int, rule: CommissionRule) -> float:
    """Early completion earns up to +50% of base; late delivery costs up to -30%."""
    if delivery_days <= 0:
        return 0.0
    if completion_days < delivery_days:
        early = (delivery_days - completion_days) / delivery_days
        return min(early * rule.time_bonus_early, TIME_BONUS_CAP)
    if completion_days > delivery_days:
        delay = (completion_days - delivery_days) / delivery_days
        return -min(delay * rule.time_penalty_delay, TIME_PENALTY_CAP)
    return 0.0


def quality_factor(quality_score: float, rule: CommissionRule) -> float:
    if quality_score >= QUALITY_FULL_THRESHOLD:
        return rule.quality_bonus
    if quality_score >= QUALITY_HALF_THRESHOLD:
        return rule.quality_bonus * 0.5
    return 0.0


class CommissionCalculator:
    def __init__(
        self,
        rules: CommissionRuleRepository,
        *,
        bonuses: Optional[BonusRepository] = None,
        strategy_factory: Optional[CommissionStrategyFactory] = None,
        currency: str = DEFAULT_CURRENCY,
    ):
        self._rules = rules
        self._bonuses = bonuses
        self._factory = strategy_factory or CommissionStrategyFactory()
        self._currency = currency

    def find_rule(self, data: CommissionInput) -> CommissionRule:
        """Latest-created active rule for the order type whose window covers the order date."""
        candidates = [
            r
            for r in self._rules.list_active_for_order_type(data.order_type)
            if r.is_active and r.order_type == data.order_type and r.applies_on(data.order_date)
        ]
        if not candidates:
            raise RuleNotFoundError(f"No commission rule found for order type: {data.order_type}")
        return max(candidates, key=lambda r: r.created_at)

    def calculate(self, data: CommissionInput) -> CommissionResult:
        rule = self.find_rule(data)
        amount = float(data.order_amount or 0)

        strategy = self._factory.for_calculation_type(rule.calculation_type)
        base = strategy.base_commission(order_amount=amount, rule=rule)
        base_commission = base.amount

        complexity = data.complexity_factor if data.complexity_factor is not None else DEFAULT_COMPLEXITY_FACTOR
        complexity_bonus = base_commission * (complexity - 1)

        t_factor: Optional[float] = None
        time_bonus = 0.0
        if data.completion_days is not None and data.delivery_days is not None:
            t_factor = time_factor(data.completion_days, data.delivery_days, rule)
            time_bonus = base_commission * t_factor

        q_factor: Optional[float] = None
        quality_bonus = 0.0
        if data.quality_score is not None:
            q_factor = quality_factor(data.quality_score, rule)
            quality_bonus = base_commission * q_factor

        total = base_commission + complexity_bonus + time_bonus + quality_bonus

        trace = CommissionTrace(
            rule_id=rule.rule_id,
            rule_name=rule.name,
            order_id=data.order_id,
            order_type=data.order_type,
            order_amount=amount,
            calculation_type=rule.calculation_type,
            base_percentage=rule.base_percentage,
            fixed_amount=rule.fixed_amount,
            percentage_part=base.percentage_part,
            fixed_part=base.fixed_part,
            complexity_factor=complexity,
            complexity_bonus=complexity_bonus,
            completion_days=data.completion_days,
            delivery_days=data.delivery_days,
            time_factor=t_factor,
            time_bonus=time_bonus,
            quality_score=data.quality_score,
            quality_factor=q_factor,
            quality_bonus=quality_bonus,
        )

        return CommissionResult(
            order_id=data.order_id,
            base_commission=base_commission,
            complexity_bonus=complexity_bonus,
            time_bonus=time_bonus,
            quality_bonus=quality_bonus,
            total_commission=total,
            rule_id=rule.rule_id,
            trace=trace,
        )

    def calculate_bulk(self, orders: Iterable[CommissionInput]) -> BatchOutcome[str, CommissionResult]:
        """Each order is calculated on its own; failed orders are logged and left out."""
        outcomes = []
        for order in orders:
            outcome = run_isolated(order.order_id, lambda order=order: self.calculate(order))
            if not outcome.ok:
                logger.error("Error calculating commission for order %s: %s", order.order_id, outcome.error)
            outcomes.append(outcome)
        return BatchOutcome.partition(outcomes)

    def generate_commission_bonus(
        self,
        employee_id: str,
        result: CommissionResult,
        period: str,
        period_type: PeriodType,
    ) -> Bonus:
        """Record a commission as a PENDING bonus awaiting approval."""
        if self._bonuses is None:
            raise RuntimeError("CommissionCalculator was built without a bonus repository")
        bonus = self._bonuses.create(
            employee_id=employee_id,
            bonus_type=BonusType.COMMISSION,
            amount=result.total_commission,
            currency=self._currency,
            period=period,
            period_type=period_type,
            status=BonusStatus.PENDING,
            commission_rule_id=result.rule_id,
            calculation_basis=result.trace.to_dict(),
        )
        logger.info("commission bonus %s created for employee %s (order %s)", bonus.bonus_id, employee_id, result.order_id)
        return bonus
