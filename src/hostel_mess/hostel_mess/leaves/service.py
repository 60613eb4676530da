from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import add_days, to_calendar_date, utc_now
from ..core.constants import DEFAULT_LEAVE_MIN_NOTICE_DAYS, PENDING_QUEUE_LIMIT
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, InsufficientNotice, InvalidRange, NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import Leave, LeaveSubmission
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Mess-cut ledger: students submit leave, admins approve it."""

    def __init__(
        self,
        leaves: LeaveRepository,
        students: StudentRepository,
        *,
        min_notice_days: int = DEFAULT_LEAVE_MIN_NOTICE_DAYS,
    ):
        self._leaves = leaves
        self._students = students
        self._min_notice_days = int(min_notice_days)

    @staticmethod
    def _parse_date(value: Any, field_name: str) -> date:
        try:
            return to_calendar_date(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{field_name} is not a valid date (YYYY-MM-DD)")

    def submit_leave(
        self,
        *,
        current_role: Role,
        hostel_id: str,
        from_date: Any,
        to_date: Any,
        now: Optional[datetime] = None,
    ) -> LeaveSubmission:
        if current_role != Role.STUDENT:
            raise AuthorizationError("Only students can apply for a mess cut")

        if not self._students.get_by_hostel_id(hostel_id):
            raise NotFoundError("Student not found")

        start = self._parse_date(from_date, "Start date")
        end = self._parse_date(to_date, "End date")
        if end < start:
            raise InvalidRange("End date must be on or after the start date")

        now = now or utc_now()
        earliest = add_days(to_calendar_date(now), self._min_notice_days)

        adjusted = False
        message = "Mess cut request submitted"
        if start < earliest:
            adjusted = True
            message = (
                f"Mess cut must be applied at least {self._min_notice_days} day(s) in advance; "
                f"start date moved from {start.isoformat()} to {earliest.isoformat()}"
            )
            start = earliest
            if start > end:
                raise InsufficientNotice(
                    f"Mess cut must start on or after {earliest.isoformat()}; "
                    f"the requested period ends on {end.isoformat()}"
                )

        leave = self._leaves.create(hostel_id=hostel_id, from_date=start, to_date=end, applied_on=now)
        logger.info("Leave %s submitted by %s (%s..%s, adjusted=%s)", leave.leave_id, hostel_id, start, end, adjusted)
        return LeaveSubmission(leave=leave, adjusted=adjusted, message=message)

    def approve_leave(self, *, current_role: Role, leave_id: int) -> Leave:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        leave = self._leaves.get(int(leave_id))
        if not leave:
            raise NotFoundError("Mess cut request not found")
        if leave.approved:
            return leave

        self._leaves.mark_approved(leave.leave_id)
        logger.info("Leave %s of %s approved", leave.leave_id, leave.hostel_id)
        return self._leaves.get(leave.leave_id) or leave

    def list_my_leaves(self, *, hostel_id: str) -> Sequence[Leave]:
        return self._leaves.list_for_student(hostel_id)

    def list_pending(self, *, current_role: Role) -> Sequence[dict]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")
        return self._leaves.list_pending(limit=PENDING_QUEUE_LIMIT)
