from __future__ import annotations

import io
import logging
from datetime import datetime
from typing import Any, Optional, Sequence

from ..attendance.calculator import compute_attendance
from ..common.datetime_utils import month_year, to_calendar_date, utc_now
from ..common.validators import require_amount
from ..core.constants import DEFAULT_CURRENCY_SYMBOL, DEFAULT_HISTORY_LIMIT
from ..core.enums import PendingLeavePolicy, Role
from ..core.exceptions import AuthorizationError, DuplicateBillingCycle, NotFoundError
from ..leaves.repository import LeaveRepository
from ..payments.repository import PaymentRepository
from ..students.repository import StudentRepository
from .calculator.base import BillSplitCalculator
from .calculator.fair_split import FairSplitCalculator
from .export import build_expense_log_workbook
from .history import DisplayEntry, format_history
from .model import BillingHistoryEntry, BillResult, ExpenseRecord, StudentBillOutcome
from .repository import BillingRepository

logger = logging.getLogger(__name__)


class BillingService:
    """Monthly mess bill: one ExpenseRecord plus one history entry per student."""

    def __init__(
        self,
        billing: BillingRepository,
        students: StudentRepository,
        leaves: LeaveRepository,
        payments: Optional[PaymentRepository] = None,
        *,
        calculator: Optional[BillSplitCalculator] = None,
        pending_policy: PendingLeavePolicy = PendingLeavePolicy.ABSENT,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    ):
        self._billing = billing
        self._students = students
        self._leaves = leaves
        self._payments = payments
        self._calculator = calculator or FairSplitCalculator()
        self._pending_policy = pending_policy
        self._currency_symbol = currency_symbol

    def generate_bill(
        self,
        *,
        current_role: Role,
        kitchen_rent: Any,
        kitchen_expense: Any,
        staff_salary: Any,
        total_expense: Any,
        now: Optional[datetime] = None,
    ) -> BillResult:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        total = require_amount(total_expense, "Total expense", allow_zero=False)
        rent = require_amount(kitchen_rent, "Kitchen rent", blank_as_zero=True)
        kitchen = require_amount(kitchen_expense, "Kitchen expense", blank_as_zero=True)
        salary = require_amount(staff_salary, "Staff salary", blank_as_zero=True)

        now = now or utc_now()
        cycle = month_year(now)
        if self._billing.get_expense_record(cycle):
            raise DuplicateBillingCycle(f"A bill for {cycle} has already been generated")

        students = list(self._students.list_non_admin())
        if not students:
            logger.info("Bill %s skipped: no students to bill", cycle)
            return BillResult(month_year=cycle, student_count=0, users_updated=0, rate_per_present_day=0.0)

        today = to_calendar_date(now)
        leaves_by_student = self._leaves.list_for_students([s.hostel_id for s in students])
        present_days = {
            s.hostel_id: compute_attendance(
                s.registration_date,
                leaves_by_student.get(s.hostel_id, []),
                today,
                pending_policy=self._pending_policy,
            ).present_days
            for s in students
        }

        split = self._calculator.split(
            kitchen_rent=rent,
            kitchen_expense=kitchen,
            staff_salary=salary,
            present_days=present_days,
        )
        logger.info(
            "Generating bill %s for %d students (total present days=%d, rate=%.4f)",
            cycle,
            len(students),
            split.total_present_days,
            split.rate_per_day,
        )

        # Summary first: its existence marks the month as billed even if the batch dies halfway.
        self._billing.create_expense_record(
            ExpenseRecord(
                month_year=cycle,
                kitchen_rent=rent,
                kitchen_expense=kitchen,
                staff_salary=salary,
                total_expense=total,
                rate_per_day=split.rate_per_day,
                users_billed_count=len(students),
                created_at=now,
            )
        )

        outcomes: list[StudentBillOutcome] = []
        for student in students:
            days = present_days[student.hostel_id]
            share = split.shares[student.hostel_id]
            entry = BillingHistoryEntry(
                hostel_id=student.hostel_id,
                month_year=cycle,
                date=now,
                total_expense=total,
                student_share=share,
                present_days=days,
                rate_per_day=split.rate_per_day,
            )
            try:
                self._billing.append_bill_entry(entry)
            except Exception as exc:
                logger.exception("Bill %s: failed to append entry for %s", cycle, student.hostel_id)
                outcomes.append(StudentBillOutcome(student.hostel_id, days, share, success=False, error=str(exc)))
            else:
                outcomes.append(StudentBillOutcome(student.hostel_id, days, share, success=True))

        result = BillResult(
            month_year=cycle,
            student_count=len(students),
            users_updated=sum(1 for o in outcomes if o.success),
            rate_per_present_day=split.rate_per_day,
            outcomes=tuple(outcomes),
        )
        if result.is_partial:
            logger.warning("Bill %s partially applied: %d/%d students updated", cycle, result.users_updated, result.student_count)
        else:
            logger.info("Bill %s applied to %d students", cycle, result.users_updated)
        return result

    def get_history(
        self,
        *,
        current_role: Role,
        requester_id: str,
        hostel_id: Optional[str] = None,
    ) -> Optional[list[DisplayEntry]]:
        target = hostel_id or requester_id
        if target != requester_id and current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        if not self._students.get_by_hostel_id(target):
            raise NotFoundError("Student not found")

        paid = self._payments.paid_cycles(target) if self._payments else set()
        return format_history(
            self._billing.list_history(target),
            currency_symbol=self._currency_symbol,
            paid_cycles=paid,
        )

    def list_expense_log(self, *, current_role: Role, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[ExpenseRecord]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")
        return self._billing.list_expense_records(limit=limit)

    def export_expense_log(self, *, current_role: Role) -> io.BytesIO:
        records = self.list_expense_log(current_role=current_role)
        return build_expense_log_workbook(records)
