from __future__ import annotations

from ..model import CommissionRule
from .base import BaseCommission, CommissionStrategy


class PercentageStrategy(CommissionStrategy):
    """Share of the order amount."""

    def base_commission(self, *, order_amount: float, rule: CommissionRule) -> BaseCommission:
        part = order_amount * (rule.base_percentage or 0) / 100
        return BaseCommission(amount=part, percentage_part=part)
