from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import to_utc_datetime
from ..core.exceptions import DuplicateBillingCycle
from ..database.connection import DatabaseConnection
from ..database.mysql_base import fetch_all, fetch_one, to_db_datetime, transaction, unique_violation
from .model import BillingHistoryEntry, ExpenseRecord
from .repository import BillingRepository

_EXPENSE_COLUMNS = """
    expense_id, month_year, kitchen_rent, kitchen_expense, staff_salary,
    total_expense, rate_per_day, users_billed_count, created_at
"""

_HISTORY_SELECT = """
    SELECT entry_id, hostel_id, month_year, generated_at, total_expense,
           student_share, present_days, rate_per_day
    FROM billing_history
    WHERE hostel_id=%s
    ORDER BY generated_at DESC, entry_id DESC
"""


def _row_to_expense(r: Dict[str, Any]) -> ExpenseRecord:
    return ExpenseRecord(
        expense_id=int(r["expense_id"]),
        month_year=r["month_year"],
        kitchen_rent=float(r["kitchen_rent"]),
        kitchen_expense=float(r["kitchen_expense"]),
        staff_salary=float(r["staff_salary"]),
        total_expense=float(r["total_expense"]),
        rate_per_day=float(r["rate_per_day"]),
        users_billed_count=int(r["users_billed_count"]),
        created_at=to_utc_datetime(r["created_at"]),
    )


def _row_to_entry(r: Dict[str, Any]) -> BillingHistoryEntry:
    return BillingHistoryEntry(
        entry_id=int(r["entry_id"]),
        hostel_id=r["hostel_id"],
        month_year=r["month_year"],
        date=to_utc_datetime(r["generated_at"]),
        total_expense=float(r["total_expense"]),
        student_share=float(r["student_share"]),
        present_days=int(r["present_days"]),
        rate_per_day=float(r["rate_per_day"]),
    )


class MySQLBillingRepository(BillingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # -------- Expense records --------
    def get_expense_record(self, month_year: str) -> Optional[ExpenseRecord]:
        with transaction(self._conn_factory) as cur:
            cur.execute(f"SELECT {_EXPENSE_COLUMNS} FROM expense_records WHERE month_year=%s", (month_year,))
            r = fetch_one(cur)
            return _row_to_expense(r) if r else None

    def create_expense_record(self, record: ExpenseRecord) -> ExpenseRecord:
        duplicate = f"A bill for {record.month_year} has already been generated"
        with unique_violation(DuplicateBillingCycle, duplicate), transaction(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO expense_records(
                    month_year, kitchen_rent, kitchen_expense, staff_salary,
                    total_expense, rate_per_day, users_billed_count, created_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.month_year,
                    record.kitchen_rent,
                    record.kitchen_expense,
                    record.staff_salary,
                    record.total_expense,
                    record.rate_per_day,
                    int(record.users_billed_count),
                    to_db_datetime(record.created_at),
                ),
            )
            expense_id = int(cur.lastrowid)

        return ExpenseRecord(
            expense_id=expense_id,
            month_year=record.month_year,
            kitchen_rent=record.kitchen_rent,
            kitchen_expense=record.kitchen_expense,
            staff_salary=record.staff_salary,
            total_expense=record.total_expense,
            rate_per_day=record.rate_per_day,
            users_billed_count=record.users_billed_count,
            created_at=record.created_at,
        )

    def list_expense_records(self, *, limit: int = 200) -> Sequence[ExpenseRecord]:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                f"SELECT {_EXPENSE_COLUMNS} FROM expense_records ORDER BY created_at DESC LIMIT %s",
                (int(limit),),
            )
            return [_row_to_expense(r) for r in fetch_all(cur)]

    # -------- Per-student history --------
    def append_bill_entry(self, entry: BillingHistoryEntry) -> None:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO billing_history(
                    hostel_id, month_year, generated_at, total_expense,
                    student_share, present_days, rate_per_day
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    entry.hostel_id,
                    entry.month_year,
                    to_db_datetime(entry.date),
                    entry.total_expense,
                    entry.student_share,
                    int(entry.present_days),
                    entry.rate_per_day,
                ),
            )
            cur.execute("UPDATE students SET needs_bill_refresh=1 WHERE hostel_id=%s", (entry.hostel_id,))

    def list_history(self, hostel_id: str) -> Sequence[BillingHistoryEntry]:
        with transaction(self._conn_factory) as cur:
            cur.execute(_HISTORY_SELECT, (hostel_id,))
            return [_row_to_entry(r) for r in fetch_all(cur)]

    # -------- Notification flag --------
    def get_bill_flag(self, hostel_id: str) -> Optional[bool]:
        with transaction(self._conn_factory) as cur:
            cur.execute("SELECT needs_bill_refresh FROM students WHERE hostel_id=%s", (hostel_id,))
            r = fetch_one(cur)
            return bool(r["needs_bill_refresh"]) if r else None

    def consume_bill_flag(self, hostel_id: str) -> Optional[tuple[bool, Sequence[BillingHistoryEntry]]]:
        with transaction(self._conn_factory) as cur:
            # Row lock: a concurrent consume waits here and then sees the cleared flag.
            cur.execute("SELECT needs_bill_refresh FROM students WHERE hostel_id=%s FOR UPDATE", (hostel_id,))
            r = fetch_one(cur)
            if not r:
                return None
            was_set = bool(r["needs_bill_refresh"])
            if was_set:
                cur.execute("UPDATE students SET needs_bill_refresh=0 WHERE hostel_id=%s", (hostel_id,))
            cur.execute(_HISTORY_SELECT, (hostel_id,))
            return was_set, [_row_to_entry(row) for row in fetch_all(cur)]
