from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_positive(value: float, field_name: str) -> float:
    if value is None or float(value) <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return float(value)


def require_range(value: float, field_name: str, low: float, high: float) -> float:
    if value is None or not (low <= float(value) <= high):
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return float(value)


def optional_range(value: Optional[float], field_name: str, low: float, high: float) -> Optional[float]:
    if value is None:
        return None
    return require_range(value, field_name, low, high)
