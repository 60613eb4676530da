from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

import pytest

from src.hostel_mess.hostel_mess.attendance.calculator import compute_attendance
from src.hostel_mess.hostel_mess.core.enums import PendingLeavePolicy


@dataclass(frozen=True)
class L:
    from_date: object
    to_date: object
    approved: bool = False


@pytest.mark.parametrize(
    "registered, as_of, expected_start",
    [
        (date(2024, 1, 10), date(2025, 10, 19), date(2025, 10, 1)),
        (date(2025, 9, 30), date(2025, 10, 19), date(2025, 10, 1)),
        (date(2025, 10, 7), date(2025, 10, 19), date(2025, 10, 7)),
        (date(2025, 10, 19), date(2025, 10, 19), date(2025, 10, 19)),
        (date(2025, 10, 1), date(2025, 10, 1), date(2025, 10, 1)),
    ],
)
def test_no_leaves_every_cycle_day_is_present(registered, as_of, expected_start):
    s = compute_attendance(registered, [], as_of)

    assert s.cycle_start == expected_start
    assert s.cycle_end == as_of
    assert s.total_days == (as_of - expected_start).days + 1
    assert s.present_days == s.total_days
    assert s.mess_cut_days == 0 and s.waiting_approval_days == 0


def test_future_registration_returns_zero_counts():
    s = compute_attendance(date(2025, 11, 1), [L(date(2025, 10, 1), date(2025, 10, 5), True)], date(2025, 10, 19))

    assert (s.present_days, s.mess_cut_days, s.waiting_approval_days, s.total_days) == (0, 0, 0, 0)


def test_leaves_are_clipped_to_the_cycle():
    leaves = [
        L(date(2025, 9, 25), date(2025, 10, 3), approved=True),  # 1..3 Oct -> 3
        L(date(2025, 10, 17), date(2025, 10, 25), approved=False),  # 17..19 Oct -> 3
    ]
    s = compute_attendance(date(2025, 1, 1), leaves, date(2025, 10, 19))

    assert s.total_days == 19
    assert s.mess_cut_days == 3
    assert s.waiting_approval_days == 3
    assert s.present_days == 13


def test_leave_ending_day_before_cycle_start_contributes_nothing():
    registered = date(2025, 10, 7)
    leaves = [L(date(2025, 10, 1), date(2025, 10, 6), approved=True)]
    s = compute_attendance(registered, leaves, date(2025, 10, 19))

    assert s.mess_cut_days == 0
    assert s.present_days == s.total_days == 13


def test_leave_starting_on_cycle_start_counts_fully():
    leaves = [L(date(2025, 10, 1), date(2025, 10, 4), approved=True)]
    s = compute_attendance(date(2025, 1, 1), leaves, date(2025, 10, 19))

    assert s.mess_cut_days == 4
    assert s.present_days == 15


def test_leaves_from_other_months_are_ignored():
    leaves = [
        L(date(2025, 8, 1), date(2025, 8, 31), approved=True),
        L(date(2025, 11, 1), date(2025, 11, 3), approved=False),
    ]
    s = compute_attendance(date(2025, 1, 1), leaves, date(2025, 10, 19))

    assert s.mess_cut_days == 0 and s.waiting_approval_days == 0
    assert s.present_days == 19


def test_pending_days_count_as_present_under_present_policy():
    leaves = [
        L(date(2025, 10, 2), date(2025, 10, 3), approved=True),
        L(date(2025, 10, 10), date(2025, 10, 14), approved=False),
    ]
    absent = compute_attendance(date(2025, 1, 1), leaves, date(2025, 10, 19))
    present = compute_attendance(date(2025, 1, 1), leaves, date(2025, 10, 19), pending_policy=PendingLeavePolicy.PRESENT)

    assert absent.present_days == 19 - 2 - 5
    assert present.present_days == 19 - 2
    assert present.waiting_approval_days == 5


def test_overlapping_leaves_never_go_below_zero_present():
    leaves = [L(date(2025, 10, 1), date(2025, 10, 19), True), L(date(2025, 10, 1), date(2025, 10, 19), False)]
    s = compute_attendance(date(2025, 1, 1), leaves, date(2025, 10, 19))

    assert s.present_days == 0


def test_dates_are_normalized_to_utc_calendar_days():
    # 23:30 at UTC-5 on 30 Sep is already 1 Oct in UTC
    registered = datetime(2025, 9, 30, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
    leaves = [L("2025-10-05", "2025-10-06T08:00:00Z", approved=True)]
    s = compute_attendance(registered, leaves, "2025-10-10")

    assert s.cycle_start == date(2025, 10, 1)
    assert s.total_days == 10
    assert s.mess_cut_days == 2


def test_same_inputs_same_output():
    leaves = [L(date(2025, 10, 2), date(2025, 10, 5), False)]
    first = compute_attendance(date(2025, 3, 1), leaves, date(2025, 10, 19))
    second = compute_attendance(date(2025, 3, 1), leaves, date(2025, 10, 19))

    assert first == second
