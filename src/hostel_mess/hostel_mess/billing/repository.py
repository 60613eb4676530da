from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import BillingHistoryEntry, ExpenseRecord


class BillingRepository(Protocol):
    # Expense records
    def get_expense_record(self, month_year: str) -> Optional[ExpenseRecord]:
        raise NotImplementedError

    def create_expense_record(self, record: ExpenseRecord) -> ExpenseRecord:
        """Insert the monthly summary; raises DuplicateBillingCycle if the month exists."""

        raise NotImplementedError

    def list_expense_records(self, *, limit: int = 200) -> Sequence[ExpenseRecord]:
        raise NotImplementedError

    # Per-student history
    def append_bill_entry(self, entry: BillingHistoryEntry) -> None:
        """Append the entry and raise the student's refresh flag in one atomic write."""

        raise NotImplementedError

    def list_history(self, hostel_id: str) -> Sequence[BillingHistoryEntry]:
        raise NotImplementedError

    # Notification flag
    def get_bill_flag(self, hostel_id: str) -> Optional[bool]:
        """None when the student does not exist."""

        raise NotImplementedError

    def consume_bill_flag(self, hostel_id: str) -> Optional[tuple[bool, Sequence[BillingHistoryEntry]]]:
        """Atomically read and clear the flag and return (was_set, history); None for unknown students."""

        raise NotImplementedError
