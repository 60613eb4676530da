from datetime import date

import pytest

from src.hostel_mess.hostel_mess.billing.model import BillingHistoryEntry
from src.hostel_mess.hostel_mess.billing.notification import BillNotificationGate
from src.hostel_mess.hostel_mess.core.exceptions import NotFoundError
from tests.fakes import InMemoryBilling, InMemoryStudents, fixed_now, make_student


def _gate_with_bill():
    students = InMemoryStudents(make_student("SNG25MCAanjali", registered=date(2025, 7, 15)))
    billing = InMemoryBilling(students)
    billing.append_bill_entry(
        BillingHistoryEntry(
            hostel_id="SNG25MCAanjali",
            month_year="10-2025",
            date=fixed_now(2025, 10, 20),
            total_expense=1800.0,
            student_share=850.0,
            present_days=10,
            rate_per_day=10.0,
        )
    )
    return BillNotificationGate(billing), billing


def test_flag_is_consumed_exactly_once():
    gate, _ = _gate_with_bill()

    assert gate.peek_bill_flag("SNG25MCAanjali") is True

    first = gate.consume_bill_flag("SNG25MCAanjali")
    second = gate.consume_bill_flag("SNG25MCAanjali")

    assert first.is_new is True
    assert first.latest.billing_cycle == "10-2025"
    assert first.latest.student_share == "₹850"
    assert second.is_new is False
    assert second.latest == first.latest
    assert gate.peek_bill_flag("SNG25MCAanjali") is False


def test_consume_without_history_returns_nothing_new():
    students = InMemoryStudents(make_student("SNG25MSCrahul", registered=date(2025, 8, 1)))
    gate = BillNotificationGate(InMemoryBilling(students))

    consumed = gate.consume_bill_flag("SNG25MSCrahul")

    assert consumed.is_new is False
    assert consumed.history is None
    assert consumed.latest is None


def test_unknown_student_is_not_found():
    gate, _ = _gate_with_bill()

    with pytest.raises(NotFoundError):
        gate.peek_bill_flag("ghost")
    with pytest.raises(NotFoundError):
        gate.consume_bill_flag("ghost")
