from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import PendingLeavePolicy
from ..core.exceptions import NotFoundError
from ..leaves.repository import LeaveRepository
from ..students.repository import StudentRepository
from .calculator import AttendanceSummary, compute_attendance


class AttendanceService:
    def __init__(
        self,
        students: StudentRepository,
        leaves: LeaveRepository,
        *,
        pending_policy: PendingLeavePolicy = PendingLeavePolicy.ABSENT,
    ):
        self._students = students
        self._leaves = leaves
        self._pending_policy = pending_policy

    def get_attendance(self, hostel_id: str, *, as_of: Optional[date] = None) -> AttendanceSummary:
        student = self._students.get_by_hostel_id(hostel_id)
        if not student:
            raise NotFoundError("Student not found")

        leaves = self._leaves.list_for_student(hostel_id)
        return compute_attendance(
            student.registration_date,
            leaves,
            as_of,
            pending_policy=self._pending_policy,
        )

    def get_attendance_ui(self, hostel_id: str, *, as_of: Optional[date] = None) -> dict:
        s = self.get_attendance(hostel_id, as_of=as_of)
        return {
            "present_days": s.present_days,
            "mess_cut_days": s.mess_cut_days,
            "waiting_approval_days": s.waiting_approval_days,
            "total_days": s.total_days,
            "cycle_start": s.cycle_start.strftime("%Y-%m-%d"),
            "cycle_end": s.cycle_end.strftime("%Y-%m-%d"),
        }
