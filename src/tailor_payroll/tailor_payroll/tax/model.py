from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Iterable, Optional

from ..core.constants import DEFAULT_SOCIAL_SECURITY_CAP, DEFAULT_SOCIAL_SECURITY_RATE, DEFAULT_TAX_BRACKETS
from ..core.enums import PeriodType, TaxType


@dataclass(frozen=True)
class TaxBracket:
    min: float
    max: Optional[float]
    rate: float

    @property
    def upper(self) -> float:
        return float("inf") if self.max is None else self.max


@dataclass(frozen=True)
class TaxPolicy:
    """Jurisdiction settings: progressive brackets plus the social-security levy."""

    brackets: tuple[TaxBracket, ...]
    social_security_rate: float
    social_security_cap: float

    @classmethod
    def from_table(
        cls,
        table: Iterable[Iterable[Any]],
        *,
        social_security_rate: float = DEFAULT_SOCIAL_SECURITY_RATE,
        social_security_cap: float = DEFAULT_SOCIAL_SECURITY_CAP,
    ) -> "TaxPolicy":
        brackets = []
        for low, high, rate in table:
            brackets.append(TaxBracket(min=float(low), max=None if high is None else float(high), rate=float(rate)))
        brackets.sort(key=lambda b: b.min)
        return cls(
            brackets=tuple(brackets),
            social_security_rate=float(social_security_rate),
            social_security_cap=float(social_security_cap),
        )

    @classmethod
    def reference(cls) -> "TaxPolicy":
        return cls.from_table(DEFAULT_TAX_BRACKETS)


@dataclass(frozen=True)
class TaxDeduction:
    """Domain entity: a configured deduction applied on top of income tax."""

    tax_deduction_id: int
    name: str
    tax_type: TaxType
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    rate: Optional[float] = None
    fixed_amount: Optional[float] = None
    min_income: Optional[float] = None
    max_income: Optional[float] = None
    is_active: bool = True


@dataclass(frozen=True)
class NewTaxDeductionEntry:
    tax_deduction_id: int
    tax_type: TaxType
    amount: float
    calculation_basis: dict = field(default_factory=dict)


@dataclass(frozen=True)
class TaxDeductionEntry:
    entry_id: int
    payroll_id: int
    tax_deduction_id: int
    tax_type: TaxType
    amount: float
    calculation_basis: dict = field(default_factory=dict)


@dataclass(frozen=True)
class TaxLine:
    tax_type: TaxType
    amount: float
    rate: float
    calculation: str


@dataclass(frozen=True)
class TaxTrace:
    employee_id: str
    gross_income: float
    period_type: PeriodType
    tax_year: int
    total_tax: float
    net_income: float
    effective_tax_rate: float
    breakdown: tuple[TaxLine, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["kind"] = "tax"
        data["breakdown"] = [asdict(line) for line in self.breakdown]
        return data


@dataclass(frozen=True)
class TaxResult:
    total_tax: float
    breakdown: list[TaxLine]
    net_income: float
    effective_tax_rate: float
    trace: TaxTrace


@dataclass(frozen=True)
class TaxReport:
    employee_id: str
    start_date: date
    end_date: date
    total_gross: float
    total_tax: float
    total_net: float
    effective_tax_rate: float
    tax_breakdown: dict[str, float]
    payroll_count: int

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["start_date"] = self.start_date.isoformat()
        data["end_date"] = self.end_date.isoformat()
        return data
