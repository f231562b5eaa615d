from __future__ import annotations

from typing import Protocol, Sequence

from .model import CommissionRule


class CommissionRuleRepository(Protocol):
    def list_active_for_order_type(self, order_type: str) -> Sequence[CommissionRule]:
        """Active rules for the order type, newest ``created_at`` first."""

        raise NotImplementedError

    def create(self, rule: CommissionRule) -> int:
        raise NotImplementedError
