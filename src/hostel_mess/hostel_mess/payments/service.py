from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..billing.model import BillingHistoryEntry
from ..billing.repository import BillingRepository
from ..common.datetime_utils import is_month_year, utc_now
from ..common.validators import parse_number
from ..core.enums import PaymentStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import Payment
from .repository import PaymentRepository

logger = logging.getLogger(__name__)


class PaymentService:
    """Records confirmed mess-bill payments. The gateway handshake happens elsewhere.

    A payment settles exactly one billed cycle: the cycle must have a history
    entry for the student and the amount must equal that entry's share.
    """

    def __init__(self, payments: PaymentRepository, students: StudentRepository, billing: BillingRepository):
        self._payments = payments
        self._students = students
        self._billing = billing

    def _billed_entry(self, hostel_id: str, billing_cycle: str) -> BillingHistoryEntry:
        for entry in self._billing.list_history(hostel_id):
            if entry.month_year == billing_cycle:
                return entry
        raise NotFoundError(f"No bill for {billing_cycle}")

    def record_payment(
        self,
        *,
        hostel_id: str,
        billing_cycle: str,
        amount: Any,
        gateway_payment_id: Optional[str] = None,
        gateway_order_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Payment:
        cycle = (billing_cycle or "").strip()
        if not is_month_year(cycle):
            raise ValidationError("Billing cycle must look like MM-YYYY")

        try:
            value = parse_number(amount)
        except (TypeError, ValueError):
            raise ValidationError("Amount must be a valid number")
        if value <= 0:
            raise ValidationError("Amount must be greater than 0")

        if not self._students.get_by_hostel_id(hostel_id):
            raise NotFoundError("Student not found")

        entry = self._billed_entry(hostel_id, cycle)
        if round(value, 2) != round(entry.student_share, 2):
            raise ValidationError(f"Amount must equal the billed share of {entry.student_share:.2f} for {cycle}")

        payment = self._payments.create(
            hostel_id=hostel_id,
            billing_cycle=cycle,
            amount=entry.student_share,
            present_days=entry.present_days,
            status=PaymentStatus.COMPLETED,
            paid_at=now or utc_now(),
            gateway_payment_id=(gateway_payment_id or "").strip() or None,
            gateway_order_id=(gateway_order_id or "").strip() or None,
        )
        logger.info("Payment %s recorded for %s (%s, %.2f)", payment.payment_id, hostel_id, cycle, payment.amount)
        return payment

    def list_payments(self, *, hostel_id: str) -> Sequence[Payment]:
        return self._payments.list_for_student(hostel_id)

    def paid_cycles(self, *, hostel_id: str) -> set[str]:
        return self._payments.paid_cycles(hostel_id)
