import json
import os

from src.tailor_payroll.tailor_payroll.core.constants import (
    DEFAULT_CURRENCY as _DEFAULT_CURRENCY,
    DEFAULT_SOCIAL_SECURITY_CAP,
    DEFAULT_SOCIAL_SECURITY_RATE,
    DEFAULT_TAX_BRACKETS,
)


def tax_brackets_from_env() -> list:
    """TAX_BRACKETS may hold a JSON list of [min, max, rate] triples on annual income."""
    raw = os.getenv("TAX_BRACKETS")
    if not raw:
        return list(DEFAULT_TAX_BRACKETS)
    return [tuple(row) for row in json.loads(raw)]


TAX_BRACKETS = tax_brackets_from_env()
SOCIAL_SECURITY_RATE = float(os.getenv("SOCIAL_SECURITY_RATE", str(DEFAULT_SOCIAL_SECURITY_RATE)))
SOCIAL_SECURITY_CAP = float(os.getenv("SOCIAL_SECURITY_CAP", str(DEFAULT_SOCIAL_SECURITY_CAP)))
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", _DEFAULT_CURRENCY)
