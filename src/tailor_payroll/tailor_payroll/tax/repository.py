from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import TaxType
from .model import TaxDeduction, TaxDeductionEntry


class TaxDeductionRepository(Protocol):
    def list_active_for_year(self, tax_year: int) -> Sequence[TaxDeduction]:
        """Active rows with effective_from <= Dec 31 and (no effective_to or effective_to >= Jan 1)."""

        raise NotImplementedError

    def find_active_by_type(self, tax_type: TaxType) -> Optional[TaxDeduction]:
        raise NotImplementedError

    def create(self, *, name: str, tax_type: TaxType, rate: Optional[float], is_active: bool = True) -> TaxDeduction:
        raise NotImplementedError


class TaxDeductionEntryRepository(Protocol):
    """Writes go through ``PayrollRepository.replace_tax_deductions``."""

    def list_for_payrolls(self, payroll_ids: Sequence[int]) -> Sequence[TaxDeductionEntry]:
        raise NotImplementedError
