from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import BonusStatus, BonusType, PeriodType
from .model import Bonus


class BonusRepository(Protocol):
    def list_approved(self, *, employee_id: str, period: str, period_type: PeriodType) -> Sequence[Bonus]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        bonus_type: BonusType,
        amount: float,
        currency: str,
        period: str,
        period_type: PeriodType,
        status: BonusStatus,
        commission_rule_id: Optional[int] = None,
        calculation_basis: Optional[dict] = None,
    ) -> Bonus:
        raise NotImplementedError
