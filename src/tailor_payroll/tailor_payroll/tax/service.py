from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from ..core.exceptions import NotFoundError, PayrollLockedError
from ..payroll.repository import PayrollRepository
from .calculator import TaxCalculator, estimate_annual_income, period_share
from .model import NewTaxDeductionEntry, TaxDeduction, TaxDeductionEntry, TaxLine, TaxReport
from .repository import TaxDeductionEntryRepository, TaxDeductionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollTaxRecord:
    total_tax: float
    entries: list[TaxDeductionEntry]


class TaxDeductionService:
    """Writes tax results onto payrolls and reports on paid ones.

    The calculator stays side-effect free; every write lives here.
    """

    def __init__(
        self,
        calculator: TaxCalculator,
        deductions: TaxDeductionRepository,
        entries: TaxDeductionEntryRepository,
        payrolls: PayrollRepository,
    ):
        self._calculator = calculator
        self._deductions = deductions
        self._entries = entries
        self._payrolls = payrolls

    def record_payroll_tax_deductions(self, payroll_id: int, gross_earnings: float) -> PayrollTaxRecord:
        """Recompute tax for a DRAFT payroll and replace its stored tax entries.

        Re-recording swaps the previous entries, so a payroll never carries two
        sets. Entries and payroll totals commit together or not at all.
        """
        payroll = self._payrolls.get_by_id(payroll_id)
        if not payroll:
            raise NotFoundError("Payroll not found")
        if payroll.is_locked:
            raise PayrollLockedError(f"Payroll {payroll_id} is {payroll.status.value}; deductions are frozen")

        annual_income = estimate_annual_income(gross_earnings, payroll.period_type)
        result = self._calculator.calculate(
            employee_id=payroll.employee_id,
            gross_income=annual_income,
            period_type=payroll.period_type,
        )

        pending: list[NewTaxDeductionEntry] = []
        for line in result.breakdown:
            deduction = self._default_deduction(line, annual_income)
            pending.append(
                NewTaxDeductionEntry(
                    tax_deduction_id=deduction.tax_deduction_id,
                    tax_type=line.tax_type,
                    amount=period_share(line.amount, payroll.period_type),
                    calculation_basis={
                        "gross_earnings": gross_earnings,
                        "annual_income": annual_income,
                        "annual_amount": line.amount,
                        "rate": line.rate,
                        "calculation": line.calculation,
                    },
                )
            )

        period_tax = period_share(result.total_tax, payroll.period_type)
        total_deductions = period_tax + payroll.other_deductions
        entries = self._payrolls.replace_tax_deductions(
            payroll_id=payroll_id,
            tax_deductions=period_tax,
            total_deductions=total_deductions,
            net_pay=payroll.total_earnings - total_deductions,
            tax_calculation_details=result.trace.to_dict(),
            entries=pending,
        )
        if entries is None:
            raise PayrollLockedError(f"Payroll {payroll_id} left DRAFT while recording deductions")

        return PayrollTaxRecord(total_tax=period_tax, entries=entries)

    def _default_deduction(self, line: TaxLine, annual_income: float) -> TaxDeduction:
        deduction = self._deductions.find_active_by_type(line.tax_type)
        if deduction:
            return deduction

        # Stored rates are fractions; income-tax lines carry a percentage.
        rate = line.amount / annual_income if annual_income else None
        deduction = self._deductions.create(
            name=line.tax_type.value.replace("_", " ").title(),
            tax_type=line.tax_type,
            rate=rate,
            is_active=True,
        )
        logger.info("created default tax deduction %s for %s", deduction.tax_deduction_id, line.tax_type.value)
        return deduction

    def generate_tax_report(self, employee_id: str, start_date: date, end_date: date) -> TaxReport:
        payrolls = self._payrolls.list_paid_for_range(employee_id=employee_id, start_date=start_date, end_date=end_date)

        total_gross = sum(p.total_earnings for p in payrolls)
        total_tax = sum(p.tax_deductions for p in payrolls)
        total_net = sum(p.net_pay for p in payrolls)

        by_type: dict[str, float] = {}
        if payrolls:
            for entry in self._entries.list_for_payrolls([p.payroll_id for p in payrolls]):
                key = entry.tax_type.value
                by_type[key] = by_type.get(key, 0.0) + entry.amount

        return TaxReport(
            employee_id=employee_id,
            start_date=start_date,
            end_date=end_date,
            total_gross=total_gross,
            total_tax=total_tax,
            total_net=total_net,
            effective_tax_rate=(total_tax / total_gross) * 100 if total_gross > 0 else 0.0,
            tax_breakdown=by_type,
            payroll_count=len(payrolls),
        )
