from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status as stored by the clock-in/out subsystem."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    HALF_DAY = "HALF_DAY"
    OVERTIME = "OVERTIME"


class PayPeriod(str, Enum):
    WEEKLY = "WEEKLY"
    BI_WEEKLY = "BI_WEEKLY"
    MONTHLY = "MONTHLY"


class PeriodType(str, Enum):
    """Cadence of a payroll or bonus period."""

    WEEKLY = "WEEKLY"
    BI_WEEKLY = "BI_WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    YEARLY = "YEARLY"


class CalculationType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"
    TIERED = "TIERED"
    HYBRID = "HYBRID"


class TaxType(str, Enum):
    INCOME_TAX = "INCOME_TAX"
    SOCIAL_SECURITY = "SOCIAL_SECURITY"
    MEDICAL_INSURANCE = "MEDICAL_INSURANCE"
    PENSION = "PENSION"
    OTHER = "OTHER"


class BonusType(str, Enum):
    PERFORMANCE = "PERFORMANCE"
    COMMISSION = "COMMISSION"
    RETENTION = "RETENTION"
    REFERRAL = "REFERRAL"
    OTHER = "OTHER"


class BonusStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class PayrollStatus(str, Enum):
    """Payroll workflow: DRAFT -> APPROVED -> PAID, or DRAFT -> CANCELLED."""

    DRAFT = "DRAFT"
    APPROVED = "APPROVED"
    PAID = "PAID"
    CANCELLED = "CANCELLED"
