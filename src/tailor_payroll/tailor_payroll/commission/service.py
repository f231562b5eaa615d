from __future__ import annotations

import logging

from ..common.validators import optional_range, require_non_empty, require_positive, require_range
from ..core.enums import CalculationType
from ..core.exceptions import ValidationError
from .model import CommissionRule
from .repository import CommissionRuleRepository

logger = logging.getLogger(__name__)


def validate_commission_rule(rule: CommissionRule) -> CommissionRule:
    require_non_empty(rule.name, "Name")
    require_non_empty(rule.order_type, "Order type")
    optional_range(rule.base_percentage, "Base percentage", 0, 100)
    if rule.fixed_amount is not None:
        require_positive(rule.fixed_amount, "Fixed amount")
    require_range(rule.complexity_multiplier_min, "Complexity multiplier min", 0.1, 10)
    require_range(rule.complexity_multiplier_max, "Complexity multiplier max", 0.1, 10)
    if rule.complexity_multiplier_min > rule.complexity_multiplier_max:
        raise ValidationError("Complexity multiplier min must not exceed max")
    require_range(rule.time_bonus_early, "Time bonus early", 0, 1)
    require_range(rule.time_penalty_delay, "Time penalty delay", 0, 1)
    require_range(rule.quality_bonus, "Quality bonus", 0, 1)

    if rule.calculation_type == CalculationType.PERCENTAGE and not rule.base_percentage:
        raise ValidationError("Base percentage is required for percentage rules")
    if rule.calculation_type == CalculationType.FIXED and not rule.fixed_amount:
        raise ValidationError("Fixed amount is required for fixed rules")
    if (
        rule.effective_from is not None
        and rule.effective_to is not None
        and rule.effective_to <= rule.effective_from
    ):
        raise ValidationError("Effective to must be after effective from")
    return rule


class CommissionRuleService:
    def __init__(self, rules: CommissionRuleRepository):
        self._rules = rules

    def create_rule(self, rule: CommissionRule) -> int:
        validate_commission_rule(rule)
        rule_id = self._rules.create(rule)
        logger.info("commission rule %s created for order type %s", rule_id, rule.order_type)
        return rule_id
