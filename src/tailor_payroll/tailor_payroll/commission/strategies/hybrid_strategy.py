from __future__ import annotations

from ..model import CommissionRule
from .base import BaseCommission, CommissionStrategy


class HybridStrategy(CommissionStrategy):
    """Percentage of the order plus a fixed amount."""

    def base_commission(self, *, order_amount: float, rule: CommissionRule) -> BaseCommission:
        percentage_part = order_amount * (rule.base_percentage or 0) / 100
        fixed_part = float(rule.fixed_amount or 0)
        return BaseCommission(
            amount=percentage_part + fixed_part,
            percentage_part=percentage_part,
            fixed_part=fixed_part,
        )
