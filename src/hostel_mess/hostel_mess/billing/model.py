from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ExpenseRecord:
    """Monthly mess expense summary; at most one per month_year."""

    month_year: str
    kitchen_rent: float
    kitchen_expense: float
    staff_salary: float
    total_expense: float
    rate_per_day: float
    users_billed_count: int
    created_at: datetime
    expense_id: Optional[int] = None


@dataclass(frozen=True)
class BillingHistoryEntry:
    """One student's share of one monthly bill (append-only)."""

    hostel_id: str
    month_year: str
    date: datetime
    total_expense: float
    student_share: float
    present_days: int
    rate_per_day: float
    entry_id: Optional[int] = None


@dataclass(frozen=True)
class StudentBillOutcome:
    hostel_id: str
    present_days: int
    student_share: float
    success: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class BillResult:
    month_year: str
    student_count: int
    users_updated: int
    rate_per_present_day: float
    outcomes: tuple[StudentBillOutcome, ...] = field(default_factory=tuple)

    @property
    def failures(self) -> list[StudentBillOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def is_partial(self) -> bool:
        return self.users_updated < self.student_count
