from __future__ import annotations

from datetime import date

import pytest

from src.hostel_mess.hostel_mess.attendance.service import AttendanceService
from src.hostel_mess.hostel_mess.core.exceptions import NotFoundError
from tests.fakes import InMemoryLeaves, InMemoryStudents, make_student


def test_attendance_uses_student_registration_and_leaves():
    students = InMemoryStudents(make_student("SNG25MCAanjali", registered=date(2025, 10, 5)))
    leaves = InMemoryLeaves()
    leaves.add("SNG25MCAanjali", date(2025, 10, 8), date(2025, 10, 9), approved=True)
    leaves.add("SNG25MCAanjali", date(2025, 10, 12), date(2025, 10, 12))

    ui = AttendanceService(students, leaves).get_attendance_ui("SNG25MCAanjali", as_of=date(2025, 10, 15))

    assert ui == {
        "present_days": 8,
        "mess_cut_days": 2,
        "waiting_approval_days": 1,
        "total_days": 11,
        "cycle_start": "2025-10-05",
        "cycle_end": "2025-10-15",
    }


def test_unknown_student_raises_not_found():
    svc = AttendanceService(InMemoryStudents(), InMemoryLeaves())
    with pytest.raises(NotFoundError):
        svc.get_attendance("nobody")
