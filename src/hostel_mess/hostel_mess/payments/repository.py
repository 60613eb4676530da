from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import PaymentStatus
from .model import Payment


class PaymentRepository(Protocol):
    def create(
        self,
        *,
        hostel_id: str,
        billing_cycle: str,
        amount: float,
        present_days: int,
        status: PaymentStatus,
        paid_at: datetime,
        gateway_payment_id: Optional[str] = None,
        gateway_order_id: Optional[str] = None,
    ) -> Payment:
        """Raises DuplicatePayment when the cycle already has a completed payment."""

        raise NotImplementedError

    def list_for_student(self, hostel_id: str) -> Sequence[Payment]:
        raise NotImplementedError

    def paid_cycles(self, hostel_id: str) -> set[str]:
        raise NotImplementedError
