from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_CURRENCY
from ..core.enums import BonusStatus, BonusType, PeriodType


@dataclass(frozen=True)
class Bonus:
    """Domain entity: an award on top of salary for one period.

    Only APPROVED bonuses whose period and period type match exactly are
    paid out by payroll generation.
    """

    bonus_id: int
    employee_id: str
    bonus_type: BonusType
    amount: float
    period: str
    period_type: PeriodType
    status: BonusStatus
    currency: str = DEFAULT_CURRENCY
    commission_rule_id: Optional[int] = None
    performance_metric_id: Optional[int] = None
    calculation_basis: Optional[dict] = None

    def to_dict(self) -> dict:
        return {
            "bonus_id": self.bonus_id,
            "employee_id": self.employee_id,
            "bonus_type": self.bonus_type.value,
            "amount": self.amount,
            "currency": self.currency,
            "period": self.period,
            "period_type": self.period_type.value,
            "status": self.status.value,
            "commission_rule_id": self.commission_rule_id,
            "performance_metric_id": self.performance_metric_id,
        }
