from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import PayPeriod


@dataclass(frozen=True)
class SalaryStructure:
    """Domain entity: an employee's pay policy.

    Rates are multipliers applied to ``hourly_rate``. Once a finalized payroll
    references a structure it is versioned through the effective dates rather
    than overwritten.
    """

    salary_structure_id: int
    employee_id: str
    name: str
    base_salary: float
    pay_period: PayPeriod
    standard_hours: float
    hourly_rate: float
    overtime_rate: float
    weekend_rate: float
    holiday_rate: float
    effective_from: date
    effective_to: Optional[date] = None
    is_active: bool = True
    description: Optional[str] = None
