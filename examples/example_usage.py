"""Example: generate one payroll through the service layer, without Flask.

    APP_ENV=development python -m examples.example_usage EMP001 2025-01 MONTHLY 2025-01-01 2025-01-31
"""

import importlib
import json
import sys

from config import get_settings_module

from src.tailor_payroll.tailor_payroll.common.datetime_utils import parse_iso_date
from src.tailor_payroll.tailor_payroll.container import build_container
from src.tailor_payroll.tailor_payroll.core.enums import PeriodType
from src.tailor_payroll.tailor_payroll.tax.model import TaxPolicy


def main(argv):
    employee_id, period, period_type, start, end = argv
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        tax_policy=TaxPolicy.from_table(
            settings.TAX_BRACKETS,
            social_security_rate=settings.SOCIAL_SECURITY_RATE,
            social_security_cap=settings.SOCIAL_SECURITY_CAP,
        ),
    )
    result = container.payroll_generator.generate(
        employee_id=employee_id,
        period=period,
        period_type=PeriodType(period_type.upper()),
        start_date=parse_iso_date(start),
        end_date=parse_iso_date(end),
    )
    print(json.dumps(result.payroll.to_dict(), indent=2))


if __name__ == "__main__":
    main(sys.argv[1:])
