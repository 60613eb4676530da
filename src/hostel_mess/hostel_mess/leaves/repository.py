from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import Leave


class LeaveRepository(Protocol):
    def create(self, *, hostel_id: str, from_date: date, to_date: date, applied_on: datetime) -> Leave:
        raise NotImplementedError

    def get(self, leave_id: int) -> Optional[Leave]:
        raise NotImplementedError

    def mark_approved(self, leave_id: int) -> bool:
        raise NotImplementedError

    def list_for_student(self, hostel_id: str) -> Sequence[Leave]:
        raise NotImplementedError

    def list_for_students(self, hostel_ids: Sequence[str]) -> dict[str, list[Leave]]:
        """Leaves grouped by hostel_id; students without leaves may be absent from the map."""

        raise NotImplementedError

    def list_pending(self, *, limit: int = 500) -> Sequence[dict]:
        """Return UI rows (joined with student)."""

        raise NotImplementedError
