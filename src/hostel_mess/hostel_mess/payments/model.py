from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PaymentStatus


@dataclass(frozen=True)
class Payment:
    payment_id: int
    hostel_id: str
    billing_cycle: str
    amount: float
    present_days: int
    status: PaymentStatus
    paid_at: datetime
    gateway_payment_id: Optional[str] = None
    gateway_order_id: Optional[str] = None
