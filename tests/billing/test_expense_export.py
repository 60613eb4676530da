from openpyxl import load_workbook

from src.hostel_mess.hostel_mess.billing.export import (
    EXPENSE_LOG_COLUMNS,
    build_expense_log_workbook,
    expense_log_frame,
)
from src.hostel_mess.hostel_mess.billing.model import ExpenseRecord
from tests.fakes import fixed_now


def _record():
    return ExpenseRecord(
        month_year="10-2025",
        kitchen_rent=1000.0,
        kitchen_expense=300.0,
        staff_salary=500.0,
        total_expense=1800.0,
        rate_per_day=10.0 / 3,
        users_billed_count=2,
        created_at=fixed_now(2025, 10, 20),
    )


def test_frame_has_one_row_per_record():
    df = expense_log_frame([_record()])

    assert list(df.columns) == EXPENSE_LOG_COLUMNS
    assert df.loc[0, "Month"] == "10-2025"
    assert df.loc[0, "Rate per day"] == 3.33
    assert df.loc[0, "Generated at"] == "2025-10-20 10:00"


def test_workbook_is_readable_xlsx():
    out = build_expense_log_workbook([_record()])

    sheet = load_workbook(out)["Expense log"]
    header = [c.value for c in sheet[1]]

    assert header == EXPENSE_LOG_COLUMNS
    assert sheet.max_row == 2
