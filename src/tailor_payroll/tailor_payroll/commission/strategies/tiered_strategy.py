from __future__ import annotations

from ...core.constants import TIERED_PLACEHOLDER_RATE
from ..model import CommissionRule
from .base import BaseCommission, CommissionStrategy


class TieredStrategy(CommissionStrategy):
    """Flat 10% of the order amount.

    ``rule.conditions`` is not read: tier boundaries have no agreed schema yet.
    """

    def base_commission(self, *, order_amount: float, rule: CommissionRule) -> BaseCommission:
        return BaseCommission(amount=order_amount * TIERED_PLACEHOLDER_RATE)
