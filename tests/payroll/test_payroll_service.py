from __future__ import annotations

from datetime import date

import pytest

from src.tailor_payroll.tailor_payroll.core.enums import PayrollStatus, PeriodType
from src.tailor_payroll.tailor_payroll.core.exceptions import NotFoundError, PayrollLockedError
from src.tailor_payroll.tailor_payroll.payroll.model import NewPayroll
from src.tailor_payroll.tailor_payroll.payroll.service import PayrollService
from tests.fakes import InMemoryPayrolls


class RacingPayrolls(InMemoryPayrolls):
    """Another writer moves the row between read and compare-and-set."""

    def update_status(self, *, payroll_id, status, expected):
        return False


def _draft(payrolls: InMemoryPayrolls):
    return payrolls.create(
        NewPayroll(
            employee_id="E1",
            period="2025-01",
            period_type=PeriodType.MONTHLY,
            start_date=date(2025, 1, 1),
            end_date=date(2025, 1, 31),
            base_salary=6000,
            overtime_pay=0,
            commission_pay=0,
            bonus_pay=0,
            tax_deductions=300,
        )
    )


def test_new_payroll_derives_totals():
    payroll = _draft(InMemoryPayrolls())

    assert payroll.total_earnings == 6000
    assert payroll.total_deductions == 300
    assert payroll.net_pay == 5700
    assert payroll.status == PayrollStatus.DRAFT
    assert not payroll.is_locked


def test_draft_is_approved_then_paid():
    payrolls = InMemoryPayrolls()
    service = PayrollService(payrolls)
    payroll = _draft(payrolls)

    assert service.approve(payroll.payroll_id).status == PayrollStatus.APPROVED
    paid = service.pay(payroll.payroll_id)

    assert paid.status == PayrollStatus.PAID
    assert paid.is_locked


def test_draft_can_be_cancelled():
    payrolls = InMemoryPayrolls()
    service = PayrollService(payrolls)
    payroll = _draft(payrolls)

    assert service.cancel(payroll.payroll_id).status == PayrollStatus.CANCELLED


@pytest.mark.parametrize(
    "steps, illegal",
    [
        ([], "pay"),
        (["approve"], "approve"),
        (["approve"], "cancel"),
        (["approve", "pay"], "cancel"),
        (["cancel"], "approve"),
    ],
)
def test_illegal_transitions_are_rejected(steps, illegal):
    payrolls = InMemoryPayrolls()
    service = PayrollService(payrolls)
    payroll = _draft(payrolls)
    for step in steps:
        getattr(service, step)(payroll.payroll_id)
    before = payrolls.get_by_id(payroll.payroll_id).status

    with pytest.raises(PayrollLockedError):
        getattr(service, illegal)(payroll.payroll_id)

    assert payrolls.get_by_id(payroll.payroll_id).status == before


def test_unknown_payroll():
    with pytest.raises(NotFoundError):
        PayrollService(InMemoryPayrolls()).approve(404)


def test_lost_compare_and_set_is_reported():
    payrolls = RacingPayrolls()
    payroll = _draft(payrolls)

    with pytest.raises(PayrollLockedError):
        PayrollService(payrolls).approve(payroll.payroll_id)
