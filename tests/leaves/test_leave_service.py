from __future__ import annotations

from datetime import date

import pytest

from src.hostel_mess.hostel_mess.core.enums import Role
from src.hostel_mess.hostel_mess.core.exceptions import (
    AuthorizationError,
    InsufficientNotice,
    InvalidRange,
    NotFoundError,
    ValidationError,
)
from src.hostel_mess.hostel_mess.leaves.service import LeaveService
from tests.fakes import InMemoryLeaves, InMemoryStudents, fixed_now, make_student

NOW = fixed_now(2025, 10, 19)


def _service(leaves=None):
    students = InMemoryStudents(make_student("SNG25MCAanjali", registered=date(2025, 7, 15)))
    return LeaveService(leaves or InMemoryLeaves(), students)


def test_future_leave_is_stored_pending_unchanged():
    leaves = InMemoryLeaves()
    result = _service(leaves).submit_leave(
        current_role=Role.STUDENT,
        hostel_id="SNG25MCAanjali",
        from_date="2025-10-22",
        to_date="2025-10-25",
        now=NOW,
    )

    assert result.adjusted is False
    assert result.leave.from_date == date(2025, 10, 22)
    assert result.leave.to_date == date(2025, 10, 25)
    assert result.leave.approved is False
    assert result.leave.applied_on == NOW
    assert len(leaves.leaves) == 1


def test_past_start_is_moved_to_tomorrow_with_message():
    result = _service().submit_leave(
        current_role=Role.STUDENT,
        hostel_id="SNG25MCAanjali",
        from_date=date(2025, 10, 15),
        to_date=date(2025, 10, 24),
        now=NOW,
    )

    assert result.adjusted is True
    assert result.leave.from_date == date(2025, 10, 20)
    assert "2025-10-20" in result.message


def test_today_start_is_moved_to_tomorrow():
    result = _service().submit_leave(
        current_role=Role.STUDENT,
        hostel_id="SNG25MCAanjali",
        from_date=date(2025, 10, 19),
        to_date=date(2025, 10, 20),
        now=NOW,
    )

    assert result.adjusted is True
    assert result.leave.from_date == result.leave.to_date == date(2025, 10, 20)


def test_adjusted_start_after_end_is_insufficient_notice():
    leaves = InMemoryLeaves()
    with pytest.raises(InsufficientNotice):
        _service(leaves).submit_leave(
            current_role=Role.STUDENT,
            hostel_id="SNG25MCAanjali",
            from_date=date(2025, 10, 17),
            to_date=date(2025, 10, 19),
            now=NOW,
        )
    assert leaves.leaves == {}


def test_end_before_start_is_invalid_range():
    with pytest.raises(InvalidRange):
        _service().submit_leave(
            current_role=Role.STUDENT,
            hostel_id="SNG25MCAanjali",
            from_date=date(2025, 10, 25),
            to_date=date(2025, 10, 22),
            now=NOW,
        )


def test_unparseable_date_is_validation_error():
    with pytest.raises(ValidationError):
        _service().submit_leave(
            current_role=Role.STUDENT,
            hostel_id="SNG25MCAanjali",
            from_date="next week",
            to_date="2025-10-22",
            now=NOW,
        )


def test_admin_cannot_submit_and_unknown_student_is_not_found():
    with pytest.raises(AuthorizationError):
        _service().submit_leave(
            current_role=Role.ADMIN, hostel_id="SNG25MCAanjali", from_date="2025-10-22", to_date="2025-10-22", now=NOW
        )
    with pytest.raises(NotFoundError):
        _service().submit_leave(
            current_role=Role.STUDENT, hostel_id="ghost", from_date="2025-10-22", to_date="2025-10-22", now=NOW
        )


def test_overlapping_requests_are_both_accepted():
    leaves = InMemoryLeaves()
    svc = _service(leaves)
    for _ in range(2):
        svc.submit_leave(
            current_role=Role.STUDENT, hostel_id="SNG25MCAanjali", from_date="2025-10-22", to_date="2025-10-24", now=NOW
        )

    assert len(leaves.leaves) == 2


def test_approve_is_idempotent():
    leaves = InMemoryLeaves()
    leave = leaves.add("SNG25MCAanjali", date(2025, 10, 22), date(2025, 10, 24))
    svc = _service(leaves)

    first = svc.approve_leave(current_role=Role.ADMIN, leave_id=leave.leave_id)
    second = svc.approve_leave(current_role=Role.ADMIN, leave_id=leave.leave_id)

    assert first.approved is True
    assert second == first


def test_only_admin_can_approve_and_missing_leave_is_not_found():
    leaves = InMemoryLeaves()
    leave = leaves.add("SNG25MCAanjali", date(2025, 10, 22), date(2025, 10, 24))
    svc = _service(leaves)

    with pytest.raises(AuthorizationError):
        svc.approve_leave(current_role=Role.STUDENT, leave_id=leave.leave_id)
    with pytest.raises(NotFoundError):
        svc.approve_leave(current_role=Role.ADMIN, leave_id=999)
    assert leaves.get(leave.leave_id).approved is False


def test_pending_queue_lists_only_unapproved():
    leaves = InMemoryLeaves()
    leaves.add("SNG25MCAanjali", date(2025, 10, 22), date(2025, 10, 24), approved=True)
    pending = leaves.add("SNG25MCAanjali", date(2025, 10, 26), date(2025, 10, 27))

    rows = _service(leaves).list_pending(current_role=Role.ADMIN)

    assert [r["leave_id"] for r in rows] == [pending.leave_id]
