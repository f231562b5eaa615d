from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from ..bonus.repository import BonusRepository
from ..commission.calculator import CommissionCalculator
from ..common.outcome import BatchOutcome, run_isolated
from ..core.enums import PeriodType
from ..core.exceptions import CalculationDegraded, ConfigurationError, ValidationError
from ..orders.source import NoCompletedOrders, OrderCompletionSource, to_commission_input
from ..overtime.calculator import OvertimeCalculator, calculate_overtime_pay
from ..salary.model import SalaryStructure
from ..salary.repository import SalaryStructureRepository
from ..tax.calculator import TaxCalculator, estimate_annual_income, period_share
from ..tax.model import TaxResult
from .model import NewPayroll, PayrollGenerationResult, PayrollTrace
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

PRORATION_DIVISORS = {
    PeriodType.MONTHLY: 1,
    PeriodType.BI_WEEKLY: 2,
    PeriodType.WEEKLY: 4,
}


def prorate_base_salary(structure: SalaryStructure, period_type: PeriodType) -> float:
    """Monthly as-is, bi-weekly half, weekly a quarter. Other period types are not prorated."""
    return float(structure.base_salary) / PRORATION_DIVISORS.get(period_type, 1)


class PayrollGenerator:
    """Builds one DRAFT payroll per employee and period.

    Steps run in a fixed order:
    salary structure -> overtime -> base salary -> commissions -> bonuses
    -> gross -> tax -> net -> persist.
    """

    def __init__(
        self,
        structures: SalaryStructureRepository,
        overtime: OvertimeCalculator,
        commissions: CommissionCalculator,
        tax: TaxCalculator,
        bonuses: BonusRepository,
        payrolls: PayrollRepository,
        *,
        orders: Optional[OrderCompletionSource] = None,
    ):
        self._structures = structures
        self._overtime = overtime
        self._commissions = commissions
        self._tax = tax
        self._bonuses = bonuses
        self._payrolls = payrolls
        self._orders = orders or NoCompletedOrders()

    def generate(
        self,
        *,
        employee_id: str,
        period: str,
        period_type: PeriodType,
        start_date: date,
        end_date: date,
    ) -> PayrollGenerationResult:
        if end_date < start_date:
            raise ValidationError("End date must not be before start date")

        structure = self._structures.get_active_for_employee(employee_id)
        if not structure:
            raise ConfigurationError(f"No salary structure found for employee: {employee_id}")

        overtime = self._overtime.calculate(employee_id, start_date, end_date, structure=structure)
        overtime_pay = calculate_overtime_pay(overtime, structure)

        base_salary = prorate_base_salary(structure, period_type)

        orders = self._orders.get_completed_orders(employee_id, start_date, end_date)
        commissions = self._commissions.calculate_bulk(to_commission_input(o, employee_id) for o in orders)
        commission_pay = sum(c.total_commission for c in commissions.successes)

        bonuses = list(self._bonuses.list_approved(employee_id=employee_id, period=period, period_type=period_type))
        bonus_pay = sum(b.amount for b in bonuses)

        total_earnings = base_salary + overtime_pay + commission_pay + bonus_pay

        annual_income = estimate_annual_income(total_earnings, period_type)
        tax_result: Optional[TaxResult] = None
        tax_error: Optional[str] = None
        try:
            tax_result = self._tax.calculate(
                employee_id=employee_id,
                gross_income=annual_income,
                period_type=period_type,
            )
        except Exception as e:
            degraded = CalculationDegraded(f"Tax calculation failed for {employee_id}: {e}")
            tax_error = str(degraded)
            logger.warning("%s; proceeding without tax deductions", degraded)

        tax_deductions = period_share(tax_result.total_tax, period_type) if tax_result else 0.0

        trace = PayrollTrace(
            overtime=overtime.trace,
            overtime_pay=overtime_pay,
            commissions=tuple(commissions.successes),
            failed_orders=tuple(commissions.failed_keys),
            bonuses=tuple(bonuses),
            tax=tax_result.trace if tax_result else None,
            tax_error=tax_error,
            annual_income_estimate=annual_income,
        )

        new = NewPayroll(
            employee_id=employee_id,
            period=period,
            period_type=period_type,
            start_date=start_date,
            end_date=end_date,
            base_salary=base_salary,
            overtime_pay=overtime_pay,
            commission_pay=commission_pay,
            bonus_pay=bonus_pay,
            tax_deductions=tax_deductions,
            other_deductions=0.0,
            salary_structure_id=structure.salary_structure_id,
            calculation_details=trace.to_dict(),
            tax_calculation_details=tax_result.trace.to_dict() if tax_result else None,
        )
        payroll = self._payrolls.create(new)

        logger.info(
            "payroll %s generated for %s (%s): gross=%.2f tax=%.2f net=%.2f",
            payroll.payroll_id, employee_id, period, payroll.total_earnings, payroll.tax_deductions, payroll.net_pay,
        )
        return PayrollGenerationResult(payroll=payroll, trace=trace)

    def generate_bulk(
        self,
        employee_ids: Iterable[str],
        *,
        period: str,
        period_type: PeriodType,
        start_date: date,
        end_date: date,
    ) -> BatchOutcome[str, PayrollGenerationResult]:
        """One payroll per employee; a failing employee is logged and left out of the successes."""
        outcomes = []
        for employee_id in employee_ids:
            outcome = run_isolated(
                employee_id,
                lambda employee_id=employee_id: self.generate(
                    employee_id=employee_id,
                    period=period,
                    period_type=period_type,
                    start_date=start_date,
                    end_date=end_date,
                ),
            )
            if not outcome.ok:
                logger.error("Error generating payroll for employee %s: %s", employee_id, outcome.error)
            outcomes.append(outcome)
        return BatchOutcome.partition(outcomes)
