from __future__ import annotations

from ..model import CommissionRule
from .base import BaseCommission, CommissionStrategy


class FixedStrategy(CommissionStrategy):
    """Flat amount per order, whatever the order is worth."""

    def base_commission(self, *, order_amount: float, rule: CommissionRule) -> BaseCommission:
        part = float(rule.fixed_amount or 0)
        return BaseCommission(amount=part, fixed_part=part)
