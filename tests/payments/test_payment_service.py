from datetime import date

import pytest

from src.hostel_mess.hostel_mess.billing.model import BillingHistoryEntry
from src.hostel_mess.hostel_mess.core.enums import PaymentStatus
from src.hostel_mess.hostel_mess.core.exceptions import DuplicatePayment, NotFoundError, ValidationError
from src.hostel_mess.hostel_mess.payments.service import PaymentService
from tests.fakes import InMemoryBilling, InMemoryPayments, InMemoryStudents, fixed_now, make_student


def _service():
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
    return PaymentService(InMemoryPayments(), students, billing)


def test_record_payment_marks_cycle_paid():
    svc = _service()

    payment = svc.record_payment(
        hostel_id="SNG25MCAanjali",
        billing_cycle="10-2025",
        amount="850",
        gateway_payment_id=" pay_123 ",
        now=fixed_now(2025, 10, 21),
    )

    assert payment.status == PaymentStatus.COMPLETED
    assert payment.amount == 850.0
    assert payment.present_days == 10
    assert payment.gateway_payment_id == "pay_123"
    assert payment.gateway_order_id is None
    assert svc.paid_cycles(hostel_id="SNG25MCAanjali") == {"10-2025"}
    assert svc.list_payments(hostel_id="SNG25MCAanjali") == [payment]


def test_same_cycle_cannot_be_paid_twice():
    svc = _service()
    svc.record_payment(hostel_id="SNG25MCAanjali", billing_cycle="10-2025", amount=850)

    with pytest.raises(DuplicatePayment):
        svc.record_payment(hostel_id="SNG25MCAanjali", billing_cycle="10-2025", amount=850)


@pytest.mark.parametrize("amount", [1, 849, 850.5, "1,800"])
def test_amount_must_match_the_billed_share(amount):
    svc = _service()

    with pytest.raises(ValidationError):
        svc.record_payment(hostel_id="SNG25MCAanjali", billing_cycle="10-2025", amount=amount)

    assert svc.paid_cycles(hostel_id="SNG25MCAanjali") == set()


def test_unbilled_cycle_cannot_be_paid():
    svc = _service()

    with pytest.raises(NotFoundError):
        svc.record_payment(hostel_id="SNG25MCAanjali", billing_cycle="01-2030", amount=850)

    assert svc.list_payments(hostel_id="SNG25MCAanjali") == []


@pytest.mark.parametrize("cycle", ["2025-10", "13-2025", "1-2025", "", None])
def test_bad_billing_cycle_is_rejected(cycle):
    with pytest.raises(ValidationError):
        _service().record_payment(hostel_id="SNG25MCAanjali", billing_cycle=cycle, amount=850)


@pytest.mark.parametrize("amount", [0, -10, "abc", None, True])
def test_bad_amount_is_rejected(amount):
    with pytest.raises(ValidationError):
        _service().record_payment(hostel_id="SNG25MCAanjali", billing_cycle="10-2025", amount=amount)


def test_unknown_student_is_not_found():
    with pytest.raises(NotFoundError):
        _service().record_payment(hostel_id="ghost", billing_cycle="10-2025", amount=850)
