from datetime import datetime

from src.hostel_mess.hostel_mess.billing.history import format_currency, format_history
from tests.fakes import fixed_now


def _row(when, share, **extra):
    row = {"date": when, "student_share": share, "total_expense": 1800, "present_days": 10, "rate_per_day": 10}
    row.update(extra)
    return row


def test_rows_are_sorted_newest_first():
    rows = [
        _row(fixed_now(2025, 9, 30), 700),
        _row(fixed_now(2025, 11, 1), 900),
        _row(fixed_now(2025, 10, 31), 800),
    ]

    out = format_history(rows)

    assert [e.amount for e in out] == [900.0, 800.0, 700.0]
    assert [e.billing_cycle for e in out] == ["11-2025", "10-2025", "09-2025"]


def test_corrupt_rows_are_dropped():
    rows = [
        _row(None, 500),
        _row(fixed_now(2025, 10, 20), float("nan")),
        _row(fixed_now(2025, 10, 21), "850"),
        _row(fixed_now(2025, 10, 22), -1),
        _row("not a date", 10),
        _row(fixed_now(2025, 9, 20), 640),
    ]

    out = format_history(rows)

    assert len(out) == 1
    assert out[0].amount == 640.0


def test_nothing_usable_is_none():
    assert format_history([]) is None
    assert format_history(None) is None
    assert format_history([_row(None, 1), _row(fixed_now(2025, 1, 1), float("inf"))]) is None


def test_display_fields():
    row = _row(
        datetime(2025, 10, 20, 9, 30),
        850.4,
        month_year="10-2025",
        total_expense=1800.0,
        rate_per_day=10.0,
        present_days=10,
    )

    entry = format_history([row], currency_symbol="Rs.", paid_cycles={"10-2025"})[0]

    assert entry.month_label == "October 2025"
    assert entry.generated_on == "20 Oct 2025"
    assert entry.student_share == "Rs.850"
    assert entry.total_expense == "Rs.1,800.00"
    assert entry.rate_per_day == "Rs.10.00"
    assert entry.present_days == 10
    assert entry.is_paid is True
    assert entry.as_dict()["billing_cycle"] == "10-2025"


def test_missing_optional_fields_default_to_zero():
    entry = format_history([{"date": "2025-10-20T08:00:00Z", "student_share": 0}])[0]

    assert entry.present_days == 0
    assert entry.total_expense == "₹0.00"
    assert entry.is_paid is False


def test_format_currency():
    assert format_currency(1234.5) == "₹1,234.50"
    assert format_currency(950, "$", decimals=0) == "$950"
