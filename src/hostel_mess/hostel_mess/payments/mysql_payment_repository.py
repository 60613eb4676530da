from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import to_utc_datetime
from ..core.enums import PaymentStatus
from ..core.exceptions import DuplicatePayment
from ..database.connection import DatabaseConnection
from ..database.mysql_base import fetch_all, to_db_datetime, transaction, unique_violation
from .model import Payment
from .repository import PaymentRepository


def _row_to_payment(r: Dict[str, Any]) -> Payment:
    return Payment(
        payment_id=int(r["payment_id"]),
        hostel_id=r["hostel_id"],
        billing_cycle=r["billing_cycle"],
        amount=float(r["amount"]),
        present_days=int(r["present_days"]),
        status=PaymentStatus(r["status"]),
        paid_at=to_utc_datetime(r["paid_at"]),
        gateway_payment_id=r.get("gateway_payment_id"),
        gateway_order_id=r.get("gateway_order_id"),
    )


class MySQLPaymentRepository(PaymentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        duplicate = f"The bill for {billing_cycle} has already been paid"
        with unique_violation(DuplicatePayment, duplicate), transaction(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO payments(
                    hostel_id, billing_cycle, amount, present_days, status,
                    gateway_payment_id, gateway_order_id, paid_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    hostel_id,
                    billing_cycle,
                    amount,
                    int(present_days),
                    status.value,
                    gateway_payment_id,
                    gateway_order_id,
                    to_db_datetime(paid_at),
                ),
            )
            payment_id = int(cur.lastrowid)

        return Payment(
            payment_id=payment_id,
            hostel_id=hostel_id,
            billing_cycle=billing_cycle,
            amount=amount,
            present_days=int(present_days),
            status=status,
            paid_at=paid_at,
            gateway_payment_id=gateway_payment_id,
            gateway_order_id=gateway_order_id,
        )

    def list_for_student(self, hostel_id: str) -> Sequence[Payment]:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT payment_id, hostel_id, billing_cycle, amount, present_days, status,
                       gateway_payment_id, gateway_order_id, paid_at
                FROM payments
                WHERE hostel_id=%s
                ORDER BY paid_at DESC, payment_id DESC
                """,
                (hostel_id,),
            )
            return [_row_to_payment(r) for r in fetch_all(cur)]

    def paid_cycles(self, hostel_id: str) -> set[str]:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                "SELECT DISTINCT billing_cycle FROM payments WHERE hostel_id=%s AND status=%s",
                (hostel_id, PaymentStatus.COMPLETED.value),
            )
            return {r["billing_cycle"] for r in fetch_all(cur)}
