from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, year_bounds
from ..core.enums import PeriodType, TaxType
from .model import TaxDeduction, TaxLine, TaxPolicy, TaxResult, TaxTrace
from .repository import TaxDeductionRepository

logger = logging.getLogger(__name__)

PERIODS_PER_YEAR = {
    PeriodType.MONTHLY: 12,
    PeriodType.BI_WEEKLY: 26,
    PeriodType.WEEKLY: 52,
}

# Computed from the policy; rows of these types are bookkeeping for entries only.
POLICY_TAX_TYPES = frozenset({TaxType.INCOME_TAX, TaxType.SOCIAL_SECURITY})


def estimate_annual_income(gross_earnings: float, period_type: PeriodType) -> float:
    """Annual equivalent of one period's gross; unknown cadences pass through unchanged."""
    return gross_earnings * PERIODS_PER_YEAR.get(period_type, 1)


def period_share(annual_amount: float, period_type: PeriodType) -> float:
    """Inverse of ``estimate_annual_income``: one period's slice of an annual amount."""
    return annual_amount / PERIODS_PER_YEAR.get(period_type, 1)


def income_tax(annual_income: float, policy: TaxPolicy) -> float:
    tax = 0.0
    for bracket in policy.brackets:
        if annual_income <= bracket.min:
            break
        taxable = min(annual_income, bracket.upper) - bracket.min
        tax += taxable * bracket.rate
    return tax


def social_security(annual_income: float, policy: TaxPolicy) -> float:
    return min(annual_income * policy.social_security_rate, policy.social_security_cap)


def deduction_amount(deduction: TaxDeduction, income: float) -> float:
    if deduction.fixed_amount:
        return float(deduction.fixed_amount)
    if not deduction.rate:
        return 0.0

    amount = income * deduction.rate
    if deduction.min_income and income < deduction.min_income:
        amount = 0.0
    if deduction.max_income and income > deduction.max_income:
        amount = deduction.max_income * deduction.rate
    return amount


def _applies(deduction: TaxDeduction, tax_year: int) -> bool:
    jan_1, dec_31 = year_bounds(tax_year)
    if not deduction.is_active or deduction.tax_type in POLICY_TAX_TYPES:
        return False
    if deduction.effective_from is not None and deduction.effective_from > dec_31:
        return False
    if deduction.effective_to is not None and deduction.effective_to < jan_1:
        return False
    return True


class TaxCalculator:
    """Pure tax computation: reads policy and deduction rows, never writes."""

    def __init__(self, deductions: TaxDeductionRepository, *, policy: Optional[TaxPolicy] = None):
        self._deductions = deductions
        self._policy = policy or TaxPolicy.reference()

    @property
    def policy(self) -> TaxPolicy:
        return self._policy

    def calculate(
        self,
        *,
        employee_id: str,
        gross_income: float,
        period_type: PeriodType,
        tax_year: Optional[int] = None,
    ) -> TaxResult:
        tax_year = tax_year or now_local().year
        configured: Sequence[TaxDeduction] = [
            d for d in self._deductions.list_active_for_year(tax_year) if _applies(d, tax_year)
        ]

        breakdown: list[TaxLine] = []
        total = 0.0

        it = income_tax(gross_income, self._policy)
        if it > 0:
            breakdown.append(
                TaxLine(
                    tax_type=TaxType.INCOME_TAX,
                    amount=it,
                    rate=(it / gross_income) * 100,
                    calculation=f"Income tax on {gross_income:,.2f}",
                )
            )
            total += it

        ss = social_security(gross_income, self._policy)
        if ss > 0:
            breakdown.append(
                TaxLine(
                    tax_type=TaxType.SOCIAL_SECURITY,
                    amount=ss,
                    rate=self._policy.social_security_rate,
                    calculation=f"Social security on {gross_income:,.2f}",
                )
            )
            total += ss

        for d in configured:
            amount = deduction_amount(d, gross_income)
            if amount > 0:
                breakdown.append(
                    TaxLine(
                        tax_type=d.tax_type,
                        amount=amount,
                        rate=d.rate or 0.0,
                        calculation=f"{d.name} calculation",
                    )
                )
                total += amount

        net_income = gross_income - total
        effective_rate = (total / gross_income) * 100 if gross_income > 0 else 0.0

        trace = TaxTrace(
            employee_id=employee_id,
            gross_income=gross_income,
            period_type=period_type,
            tax_year=tax_year,
            total_tax=total,
            net_income=net_income,
            effective_tax_rate=effective_rate,
            breakdown=tuple(breakdown),
        )
        logger.debug("tax for %s on %.2f (%s): %.2f", employee_id, gross_income, tax_year, total)

        return TaxResult(
            total_tax=total,
            breakdown=breakdown,
            net_income=net_income,
            effective_tax_rate=effective_rate,
            trace=trace,
        )
