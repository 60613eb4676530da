"""Attendance for the current billing cycle.

The cycle is the calendar month of ``as_of`` up to and including ``as_of``.
A student who registered during that month starts the cycle on the
registration day instead of the 1st.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Iterable, Optional, Protocol

from ..common.datetime_utils import first_day_of_month, inclusive_days, to_calendar_date, utc_today
from ..core.enums import PendingLeavePolicy


class LeaveInterval(Protocol):
    from_date: Any
    to_date: Any
    approved: bool


@dataclass(frozen=True)
class AttendanceSummary:
    present_days: int
    mess_cut_days: int
    waiting_approval_days: int
    total_days: int
    cycle_start: date
    cycle_end: date


def cycle_bounds(registration_date: date, as_of: date) -> tuple[date, date]:
    month_start = first_day_of_month(as_of)
    if month_start <= registration_date <= as_of:
        return registration_date, as_of
    return month_start, as_of


def compute_attendance(
    registration_date: Any,
    leaves: Iterable[LeaveInterval],
    as_of: Optional[Any] = None,
    *,
    pending_policy: PendingLeavePolicy = PendingLeavePolicy.ABSENT,
) -> AttendanceSummary:
    registered = to_calendar_date(registration_date)
    cycle_end = to_calendar_date(as_of) if as_of is not None else utc_today()

    if registered > cycle_end:
        return AttendanceSummary(0, 0, 0, 0, cycle_end, cycle_end)

    cycle_start, cycle_end = cycle_bounds(registered, cycle_end)
    total_days = inclusive_days(cycle_start, cycle_end)

    mess_cut_days = 0
    waiting_approval_days = 0
    for leave in leaves:
        start = max(to_calendar_date(leave.from_date), cycle_start)
        end = min(to_calendar_date(leave.to_date), cycle_end)
        days = inclusive_days(start, end)
        if not days:
            continue
        if leave.approved:
            mess_cut_days += days
        else:
            waiting_approval_days += days

    absent_days = mess_cut_days
    if pending_policy == PendingLeavePolicy.ABSENT:
        absent_days += waiting_approval_days
    present_days = max(total_days - absent_days, 0)

    return AttendanceSummary(
        present_days=present_days,
        mess_cut_days=mess_cut_days,
        waiting_approval_days=waiting_approval_days,
        total_days=total_days,
        cycle_start=cycle_start,
        cycle_end=cycle_end,
    )
