from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from ..tax.model import NewTaxDeductionEntry, TaxDeductionEntry
from .model import NewPayroll, Payroll


class PayrollRepository(Protocol):
    def create(self, new: NewPayroll) -> Payroll:
        """Insert in DRAFT status and return the stored row."""

        raise NotImplementedError

    def get_by_id(self, payroll_id: int) -> Optional[Payroll]:
        raise NotImplementedError

    def update_status(self, *, payroll_id: int, status: PayrollStatus, expected: PayrollStatus) -> bool:
        """Compare-and-set on status; False when the row is no longer in ``expected``."""

        raise NotImplementedError

    def replace_tax_deductions(
        self,
        *,
        payroll_id: int,
        tax_deductions: float,
        total_deductions: float,
        net_pay: float,
        tax_calculation_details: Optional[dict],
        entries: Sequence[NewTaxDeductionEntry],
    ) -> Optional[list[TaxDeductionEntry]]:
        """Swap the payroll's tax entries and deduction totals in one transaction.

        Only DRAFT rows are touched. Returns the stored entries, or None when the
        row is missing or no longer DRAFT.
        """

        raise NotImplementedError

    def list_paid_for_range(self, *, employee_id: str, start_date: date, end_date: date) -> Sequence[Payroll]:
        raise NotImplementedError
