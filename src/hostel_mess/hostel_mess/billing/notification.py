"""Tell each student about a new bill exactly once.

``generate_bill`` raises the per-student flag; the first ``consume_bill_flag``
after that clears it in the same transaction that reads the history. A consume
racing a new bill run is last-writer-wins on the flag, which is acceptable for
an admin-triggered, once-a-month operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_CURRENCY_SYMBOL
from ..core.exceptions import NotFoundError
from .history import DisplayEntry, format_history
from .repository import BillingRepository


@dataclass(frozen=True)
class ConsumedBill:
    is_new: bool
    history: Optional[list[DisplayEntry]]

    @property
    def latest(self) -> Optional[DisplayEntry]:
        return self.history[0] if self.history else None


class BillNotificationGate:
    def __init__(self, billing: BillingRepository, *, currency_symbol: str = DEFAULT_CURRENCY_SYMBOL):
        self._billing = billing
        self._currency_symbol = currency_symbol

    def peek_bill_flag(self, hostel_id: str) -> bool:
        flag = self._billing.get_bill_flag(hostel_id)
        if flag is None:
            raise NotFoundError("Student not found")
        return flag

    def consume_bill_flag(self, hostel_id: str) -> ConsumedBill:
        result = self._billing.consume_bill_flag(hostel_id)
        if result is None:
            raise NotFoundError("Student not found")

        was_set, entries = result
        return ConsumedBill(
            is_new=was_set,
            history=format_history(entries, currency_symbol=self._currency_symbol),
        )
