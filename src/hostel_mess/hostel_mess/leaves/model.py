from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Leave:
    """A mess-cut request covering [from_date, to_date] inclusive."""

    leave_id: int
    hostel_id: str
    from_date: date
    to_date: date
    approved: bool
    applied_on: datetime

    @property
    def days(self) -> int:
        return (self.to_date - self.from_date).days + 1


@dataclass(frozen=True)
class LeaveSubmission:
    leave: Leave
    adjusted: bool
    message: str
