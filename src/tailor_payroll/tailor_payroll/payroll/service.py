from __future__ import annotations

import logging

from ..core.enums import PayrollStatus
from ..core.exceptions import NotFoundError, PayrollLockedError
from .model import Payroll
from .repository import PayrollRepository

logger = logging.getLogger(__name__)

# target status -> statuses it may be reached from
ALLOWED_TRANSITIONS = {
    PayrollStatus.APPROVED: (PayrollStatus.DRAFT,),
    PayrollStatus.PAID: (PayrollStatus.APPROVED,),
    PayrollStatus.CANCELLED: (PayrollStatus.DRAFT,),
}


class PayrollService:
    def __init__(self, payrolls: PayrollRepository):
        self._payrolls = payrolls

    def get(self, payroll_id: int) -> Payroll:
        payroll = self._payrolls.get_by_id(payroll_id)
        if not payroll:
            raise NotFoundError("Payroll not found")
        return payroll

    def approve(self, payroll_id: int) -> Payroll:
        return self._transition(payroll_id, PayrollStatus.APPROVED)

    def pay(self, payroll_id: int) -> Payroll:
        return self._transition(payroll_id, PayrollStatus.PAID)

    def cancel(self, payroll_id: int) -> Payroll:
        return self._transition(payroll_id, PayrollStatus.CANCELLED)

    def _transition(self, payroll_id: int, target: PayrollStatus) -> Payroll:
        payroll = self.get(payroll_id)
        if payroll.status not in ALLOWED_TRANSITIONS[target]:
            raise PayrollLockedError(
                f"Cannot move payroll {payroll_id} from {payroll.status.value} to {target.value}"
            )

        ok = self._payrolls.update_status(payroll_id=payroll_id, status=target, expected=payroll.status)
        if not ok:
            raise PayrollLockedError(f"Payroll {payroll_id} changed status concurrently")

        logger.info("payroll %s: %s -> %s", payroll_id, payroll.status.value, target.value)
        return self.get(payroll_id)
