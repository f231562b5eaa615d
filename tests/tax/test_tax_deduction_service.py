from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.tailor_payroll.tailor_payroll.core.enums import PayrollStatus, PeriodType, TaxType
from src.tailor_payroll.tailor_payroll.core.exceptions import NotFoundError, PayrollLockedError
from src.tailor_payroll.tailor_payroll.payroll.model import NewPayroll
from src.tailor_payroll.tailor_payroll.tax.calculator import TaxCalculator
from src.tailor_payroll.tailor_payroll.tax.model import TaxDeduction
from src.tailor_payroll.tailor_payroll.tax.service import TaxDeductionService
from tests.fakes import InMemoryPayrolls, InMemoryTaxDeductions, InMemoryTaxEntries


def _new_payroll(employee_id="E1", *, start=date(2025, 1, 1), end=date(2025, 1, 31), base=50000.0) -> NewPayroll:
    return NewPayroll(
        employee_id=employee_id,
        period=start.strftime("%Y-%m"),
        period_type=PeriodType.MONTHLY,
        start_date=start,
        end_date=end,
        base_salary=base,
        overtime_pay=0.0,
        commission_pay=0.0,
        bonus_pay=0.0,
        tax_deductions=0.0,
    )


@pytest.fixture()
def setup():
    deductions = InMemoryTaxDeductions()
    entries = InMemoryTaxEntries()
    payrolls = InMemoryPayrolls(entries)
    service = TaxDeductionService(TaxCalculator(deductions), deductions, entries, payrolls)
    return service, deductions, entries, payrolls


def test_record_deductions_updates_draft_payroll(setup):
    service, deductions, entries, payrolls = setup
    payroll = payrolls.create(_new_payroll())

    record = service.record_payroll_tax_deductions(payroll.payroll_id, 50000)

    # annual 600k: income tax 0.09 * 225k = 20250, social security 30000 -> 50250 / 12
    assert record.total_tax == pytest.approx(50250 / 12)
    stored = payrolls.get_by_id(payroll.payroll_id)
    assert stored.tax_deductions == pytest.approx(50250 / 12)
    assert stored.total_deductions == pytest.approx(50250 / 12)
    assert stored.net_pay == pytest.approx(50000 - 50250 / 12)
    assert stored.tax_calculation_details["kind"] == "tax"

    assert [e.tax_type for e in entries.entries] == [TaxType.INCOME_TAX, TaxType.SOCIAL_SECURITY]
    assert entries.entries[0].amount == pytest.approx(20250 / 12)
    assert entries.entries[0].calculation_basis["annual_income"] == pytest.approx(600000)


def test_default_deduction_rows_are_created_once(setup):
    service, deductions, entries, payrolls = setup
    first = payrolls.create(_new_payroll())
    second = payrolls.create(_new_payroll(start=date(2025, 2, 1), end=date(2025, 2, 28)))

    service.record_payroll_tax_deductions(first.payroll_id, 50000)
    service.record_payroll_tax_deductions(second.payroll_id, 50000)

    assert sorted(d.tax_type for d in deductions.deductions) == [TaxType.INCOME_TAX, TaxType.SOCIAL_SECURITY]
    assert deductions.deductions[0].name == "Income Tax"
    assert len(entries.entries) == 4


def test_existing_deduction_row_is_reused(setup):
    service, deductions, entries, payrolls = setup
    deductions.deductions.append(
        TaxDeduction(tax_deduction_id=42, name="Federal", tax_type=TaxType.INCOME_TAX, rate=None)
    )
    payroll = payrolls.create(_new_payroll())

    service.record_payroll_tax_deductions(payroll.payroll_id, 50000)

    assert entries.entries[0].tax_deduction_id == 42


def test_record_deductions_rejects_locked_payroll(setup):
    service, _, entries, payrolls = setup
    payroll = payrolls.add(replace(payrolls.create(_new_payroll()), status=PayrollStatus.APPROVED))

    with pytest.raises(PayrollLockedError):
        service.record_payroll_tax_deductions(payroll.payroll_id, 50000)

    assert entries.entries == []


def test_record_deductions_on_unknown_payroll(setup):
    service, *_ = setup

    with pytest.raises(NotFoundError):
        service.record_payroll_tax_deductions(999, 50000)


def test_tax_report_aggregates_paid_payrolls_only(setup):
    service, _, _, payrolls = setup
    jan = payrolls.create(_new_payroll())
    feb = payrolls.create(_new_payroll(start=date(2025, 2, 1), end=date(2025, 2, 28)))
    mar = payrolls.create(_new_payroll(start=date(2025, 3, 1), end=date(2025, 3, 31)))
    for p in (jan, feb, mar):
        service.record_payroll_tax_deductions(p.payroll_id, 50000)
    for p in (jan, feb):
        payrolls.add(replace(payrolls.get_by_id(p.payroll_id), status=PayrollStatus.PAID))
    payrolls.create(_new_payroll("E2"))

    report = service.generate_tax_report("E1", date(2025, 1, 1), date(2025, 12, 31))

    monthly_tax = 50250 / 12
    assert report.payroll_count == 2
    assert report.total_gross == pytest.approx(100000)
    assert report.total_tax == pytest.approx(2 * monthly_tax)
    assert report.total_net == pytest.approx(100000 - 2 * monthly_tax)
    assert report.effective_tax_rate == pytest.approx(monthly_tax / 50000 * 100)
    assert report.tax_breakdown["INCOME_TAX"] == pytest.approx(2 * 20250 / 12)
    assert report.tax_breakdown["SOCIAL_SECURITY"] == pytest.approx(2 * 30000 / 12)
    assert report.to_dict()["start_date"] == "2025-01-01"


def test_tax_report_without_paid_payrolls(setup):
    service, *_ = setup

    report = service.generate_tax_report("E1", date(2025, 1, 1), date(2025, 12, 31))

    assert report.payroll_count == 0
    assert report.effective_tax_rate == 0
    assert report.tax_breakdown == {}


class StaleReadPayrolls(InMemoryPayrolls):
    """Serves a DRAFT snapshot while the stored row has already been approved."""

    def __init__(self, entries):
        super().__init__(entries)
        self.snapshots = {}

    def get_by_id(self, payroll_id):
        return self.snapshots.get(payroll_id) or super().get_by_id(payroll_id)


def test_recorded_default_rows_do_not_change_later_tax(setup):
    service, deductions, _, payrolls = setup
    calculator = TaxCalculator(deductions)
    before = calculator.calculate(
        employee_id="E2", gross_income=600000, period_type=PeriodType.MONTHLY, tax_year=2025
    ).total_tax

    service.record_payroll_tax_deductions(payrolls.create(_new_payroll()).payroll_id, 50000)
    after = calculator.calculate(
        employee_id="E2", gross_income=600000, period_type=PeriodType.MONTHLY, tax_year=2025
    ).total_tax

    assert before == pytest.approx(50250)
    assert after == pytest.approx(before)
    rates = {d.tax_type: d.rate for d in deductions.deductions}
    assert rates[TaxType.INCOME_TAX] == pytest.approx(20250 / 600000)
    assert rates[TaxType.SOCIAL_SECURITY] == pytest.approx(0.05)


def test_re_recording_replaces_previous_entries(setup):
    service, _, entries, payrolls = setup
    payroll = payrolls.create(_new_payroll())

    service.record_payroll_tax_deductions(payroll.payroll_id, 50000)
    record = service.record_payroll_tax_deductions(payroll.payroll_id, 50000)

    assert len(entries.entries) == 2
    assert entries.entries == record.entries

    payrolls.add(replace(payrolls.get_by_id(payroll.payroll_id), status=PayrollStatus.PAID))
    report = service.generate_tax_report("E1", date(2025, 1, 1), date(2025, 12, 31))
    assert report.tax_breakdown["INCOME_TAX"] == pytest.approx(20250 / 12)


def test_payroll_leaving_draft_mid_recording_keeps_no_entries():
    deductions = InMemoryTaxDeductions()
    entries = InMemoryTaxEntries()
    payrolls = StaleReadPayrolls(entries)
    service = TaxDeductionService(TaxCalculator(deductions), deductions, entries, payrolls)
    draft = payrolls.create(_new_payroll())
    payrolls.snapshots[draft.payroll_id] = draft
    payrolls.add(replace(draft, status=PayrollStatus.APPROVED))

    with pytest.raises(PayrollLockedError):
        service.record_payroll_tax_deductions(draft.payroll_id, 50000)

    assert entries.entries == []
    assert payrolls.rows[draft.payroll_id].tax_deductions == 0
