from __future__ import annotations

import io
from typing import Sequence

import pandas as pd

from .model import ExpenseRecord

EXPENSE_LOG_COLUMNS = [
    "Month",
    "Kitchen rent",
    "Kitchen expense",
    "Staff salary",
    "Total expense",
    "Rate per day",
    "Students billed",
    "Generated at",
]


def expense_log_frame(records: Sequence[ExpenseRecord]) -> pd.DataFrame:
    rows = [
        (
            r.month_year,
            r.kitchen_rent,
            r.kitchen_expense,
            r.staff_salary,
            r.total_expense,
            round(r.rate_per_day, 2),
            r.users_billed_count,
            r.created_at,
        )
        for r in records
    ]
    df = pd.DataFrame(rows, columns=EXPENSE_LOG_COLUMNS)
    # Excel has no timezone support
    df["Generated at"] = pd.to_datetime(df["Generated at"], utc=True).dt.strftime("%Y-%m-%d %H:%M")
    return df


def build_expense_log_workbook(records: Sequence[ExpenseRecord]) -> io.BytesIO:
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        expense_log_frame(records).to_excel(writer, index=False, sheet_name="Expense log")
    out.seek(0)
    return out
