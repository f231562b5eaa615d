from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .bonus.mysql_bonus_repository import MySQLBonusRepository
from .commission.calculator import CommissionCalculator
from .commission.mysql_commission_repository import MySQLCommissionRuleRepository
from .commission.service import CommissionRuleService
from .core.constants import DEFAULT_CURRENCY
from .database.connection import DBConfig, DatabaseConnection
from .orders.source import NoCompletedOrders, OrderCompletionSource
from .overtime.calculator import OvertimeCalculator
from .overtime.holidays import HolidayCalendar, NoHolidays
from .payroll.generator import PayrollGenerator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollService
from .salary.mysql_salary_repository import MySQLSalaryStructureRepository
from .salary.service import SalaryStructureService
from .tax.calculator import TaxCalculator
from .tax.model import TaxPolicy
from .tax.mysql_tax_repository import MySQLTaxDeductionEntryRepository, MySQLTaxDeductionRepository
from .tax.service import TaxDeductionService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    salary_repo: MySQLSalaryStructureRepository
    commission_rules_repo: MySQLCommissionRuleRepository
    bonuses_repo: MySQLBonusRepository
    tax_deductions_repo: MySQLTaxDeductionRepository
    tax_entries_repo: MySQLTaxDeductionEntryRepository
    payrolls_repo: MySQLPayrollRepository

    salary_service: SalaryStructureService
    commission_rule_service: CommissionRuleService
    overtime_calculator: OvertimeCalculator
    commission_calculator: CommissionCalculator
    tax_calculator: TaxCalculator
    tax_deduction_service: TaxDeductionService
    payroll_generator: PayrollGenerator
    payroll_service: PayrollService


def build_container(
    *,
    db_config: dict,
    tax_policy: Optional[TaxPolicy] = None,
    holidays: Optional[HolidayCalendar] = None,
    orders: Optional[OrderCompletionSource] = None,
    currency: str = DEFAULT_CURRENCY,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    attendance_repo = MySQLAttendanceRepository(conn)
    salary_repo = MySQLSalaryStructureRepository(conn)
    commission_rules_repo = MySQLCommissionRuleRepository(conn)
    bonuses_repo = MySQLBonusRepository(conn)
    tax_deductions_repo = MySQLTaxDeductionRepository(conn)
    tax_entries_repo = MySQLTaxDeductionEntryRepository(conn)
    payrolls_repo = MySQLPayrollRepository(conn)

    overtime_calculator = OvertimeCalculator(attendance_repo, salary_repo, holidays=holidays or NoHolidays())
    commission_calculator = CommissionCalculator(commission_rules_repo, bonuses=bonuses_repo, currency=currency)
    tax_calculator = TaxCalculator(tax_deductions_repo, policy=tax_policy)

    payroll_generator = PayrollGenerator(
        salary_repo,
        overtime_calculator,
        commission_calculator,
        tax_calculator,
        bonuses_repo,
        payrolls_repo,
        orders=orders or NoCompletedOrders(),
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        salary_repo=salary_repo,
        commission_rules_repo=commission_rules_repo,
        bonuses_repo=bonuses_repo,
        tax_deductions_repo=tax_deductions_repo,
        tax_entries_repo=tax_entries_repo,
        payrolls_repo=payrolls_repo,
        salary_service=SalaryStructureService(salary_repo),
        commission_rule_service=CommissionRuleService(commission_rules_repo),
        overtime_calculator=overtime_calculator,
        commission_calculator=commission_calculator,
        tax_calculator=tax_calculator,
        tax_deduction_service=TaxDeductionService(tax_calculator, tax_deductions_repo, tax_entries_repo, payrolls_repo),
        payroll_generator=payroll_generator,
        payroll_service=PayrollService(payrolls_repo),
    )
