from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from ..bonus.model import Bonus
from ..commission.model import CommissionResult
from ..core.enums import PayrollStatus, PeriodType
from ..overtime.model import OvertimeTrace
from ..tax.model import TaxTrace


@dataclass(frozen=True)
class PayrollTrace:
    """Audit trail of every sub-calculation behind a payroll."""

    overtime: OvertimeTrace
    overtime_pay: float
    commissions: tuple[CommissionResult, ...] = ()
    failed_orders: tuple[str, ...] = ()
    bonuses: tuple[Bonus, ...] = ()
    tax: Optional[TaxTrace] = None
    tax_error: Optional[str] = None
    annual_income_estimate: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "overtime_calculation": self.overtime.to_dict(),
            "overtime_pay": self.overtime_pay,
            "commission_calculations": [c.to_dict() for c in self.commissions],
            "failed_orders": list(self.failed_orders),
            "bonuses": [b.to_dict() for b in self.bonuses],
            "annual_income_estimate": self.annual_income_estimate,
            "tax_calculation": self.tax.to_dict() if self.tax else None,
            "tax_error": self.tax_error,
        }


@dataclass(frozen=True)
class NewPayroll:
    """A payroll about to be persisted. Totals are derived, never passed in."""

    employee_id: str
    period: str
    period_type: PeriodType
    start_date: date
    end_date: date
    base_salary: float
    overtime_pay: float
    commission_pay: float
    bonus_pay: float
    tax_deductions: float
    other_deductions: float = 0.0
    salary_structure_id: Optional[int] = None
    calculation_details: dict = field(default_factory=dict)
    tax_calculation_details: Optional[dict] = None

    @property
    def total_earnings(self) -> float:
        return self.base_salary + self.overtime_pay + self.commission_pay + self.bonus_pay

    @property
    def total_deductions(self) -> float:
        return self.tax_deductions + self.other_deductions

    @property
    def net_pay(self) -> float:
        return self.total_earnings - self.total_deductions


@dataclass(frozen=True)
class Payroll:
    """Domain entity: one employee's pay for one period."""

    payroll_id: int
    employee_id: str
    period: str
    period_type: PeriodType
    start_date: date
    end_date: date
    base_salary: float
    overtime_pay: float
    commission_pay: float
    bonus_pay: float
    total_earnings: float
    tax_deductions: float
    other_deductions: float
    total_deductions: float
    net_pay: float
    status: PayrollStatus
    salary_structure_id: Optional[int] = None
    calculation_details: dict = field(default_factory=dict)
    tax_calculation_details: Optional[dict] = None
    created_at: Optional[datetime] = None

    @property
    def is_locked(self) -> bool:
        """Monetary fields are frozen once the payroll leaves DRAFT."""
        return self.status != PayrollStatus.DRAFT

    def to_dict(self) -> dict[str, Any]:
        return {
            "payroll_id": self.payroll_id,
            "employee_id": self.employee_id,
            "period": self.period,
            "period_type": self.period_type.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "base_salary": self.base_salary,
            "overtime_pay": self.overtime_pay,
            "commission_pay": self.commission_pay,
            "bonus_pay": self.bonus_pay,
            "total_earnings": self.total_earnings,
            "tax_deductions": self.tax_deductions,
            "other_deductions": self.other_deductions,
            "total_deductions": self.total_deductions,
            "net_pay": self.net_pay,
            "status": self.status.value,
            "salary_structure_id": self.salary_structure_id,
        }


@dataclass(frozen=True)
class PayrollGenerationResult:
    payroll: Payroll
    trace: PayrollTrace

    @property
    def total_earnings(self) -> float:
        return self.payroll.total_earnings
