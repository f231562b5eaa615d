from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..core.enums import CalculationType


@dataclass(frozen=True)
class CommissionRule:
    """Domain entity: how an order type turns into commission."""

    rule_id: int
    name: str
    order_type: str
    calculation_type: CalculationType
    complexity_multiplier_min: float
    complexity_multiplier_max: float
    time_bonus_early: float
    time_penalty_delay: float
    quality_bonus: float
    created_at: datetime
    base_percentage: Optional[float] = None
    fixed_amount: Optional[float] = None
    conditions: Optional[dict] = None
    is_active: bool = True
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    description: Optional[str] = None

    def applies_on(self, day: Optional[date]) -> bool:
        """True when ``day`` falls in [effective_from, effective_to); open ends always match."""
        if day is None:
            return True
        if self.effective_from is not None and day < self.effective_from:
            return False
        if self.effective_to is not None and day >= self.effective_to:
            return False
        return True


@dataclass(frozen=True)
class CommissionInput:
    order_id: str
    employee_id: str
    order_type: str
    order_amount: float
    complexity_factor: Optional[float] = None
    completion_days: Optional[int] = None
    delivery_days: Optional[int] = None
    quality_score: Optional[float] = None
    order_date: Optional[date] = None


@dataclass(frozen=True)
class CommissionTrace:
    rule_id: int
    rule_name: str
    order_id: str
    order_type: str
    order_amount: float
    calculation_type: CalculationType
    base_percentage: Optional[float] = None
    fixed_amount: Optional[float] = None
    percentage_part: Optional[float] = None
    fixed_part: Optional[float] = None
    complexity_factor: float = 1.0
    complexity_bonus: float = 0.0
    completion_days: Optional[int] = None
    delivery_days: Optional[int] = None
    time_factor: Optional[float] = None
    time_bonus: float = 0.0
    quality_score: Optional[float] = None
    quality_factor: Optional[float] = None
    quality_bonus: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["kind"] = "commission"
        return data


@dataclass(frozen=True)
class CommissionResult:
    order_id: str
    base_commission: float
    complexity_bonus: float
    time_bonus: float
    quality_bonus: float
    total_commission: float
    rule_id: int
    trace: CommissionTrace

    def to_dict(self) -> dict[str, Any]:
        return {
            "order_id": self.order_id,
            "base_commission": self.base_commission,
            "complexity_bonus": self.complexity_bonus,
            "time_bonus": self.time_bonus,
            "quality_bonus": self.quality_bonus,
            "total_commission": self.total_commission,
            "rule_id": self.rule_id,
            "trace": self.trace.to_dict(),
        }
