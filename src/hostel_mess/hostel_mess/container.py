from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceService
from .billing.mysql_billing_repository import MySQLBillingRepository
from .billing.notification import BillNotificationGate
from .billing.repository import BillingRepository
from .billing.service import BillingService
from .core.constants import DEFAULT_CURRENCY_SYMBOL, DEFAULT_LEAVE_MIN_NOTICE_DAYS
from .core.enums import PendingLeavePolicy
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.repository import PaymentRepository
from .payments.service import PaymentService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    students_repo: StudentRepository
    leaves_repo: LeaveRepository
    billing_repo: BillingRepository
    payments_repo: PaymentRepository

    attendance_service: AttendanceService
    leave_service: LeaveService
    billing_service: BillingService
    bill_notification_gate: BillNotificationGate
    payment_service: PaymentService


def assemble_container(
    *,
    conn: Optional[DatabaseConnection],
    students_repo: StudentRepository,
    leaves_repo: LeaveRepository,
    billing_repo: BillingRepository,
    payments_repo: PaymentRepository,
    pending_policy: PendingLeavePolicy = PendingLeavePolicy.ABSENT,
    min_notice_days: int = DEFAULT_LEAVE_MIN_NOTICE_DAYS,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> Container:
    attendance_service = AttendanceService(students_repo, leaves_repo, pending_policy=pending_policy)
    leave_service = LeaveService(leaves_repo, students_repo, min_notice_days=min_notice_days)
    billing_service = BillingService(
        billing_repo,
        students_repo,
        leaves_repo,
        payments_repo,
        pending_policy=pending_policy,
        currency_symbol=currency_symbol,
    )
    bill_notification_gate = BillNotificationGate(billing_repo, currency_symbol=currency_symbol)
    payment_service = PaymentService(payments_repo, students_repo, billing_repo)

    return Container(
        conn=conn,
        students_repo=students_repo,
        leaves_repo=leaves_repo,
        billing_repo=billing_repo,
        payments_repo=payments_repo,
        attendance_service=attendance_service,
        leave_service=leave_service,
        billing_service=billing_service,
        bill_notification_gate=bill_notification_gate,
        payment_service=payment_service,
    )


def build_container(
    *,
    db_config: dict,
    pending_policy: PendingLeavePolicy = PendingLeavePolicy.ABSENT,
    min_notice_days: int = DEFAULT_LEAVE_MIN_NOTICE_DAYS,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble_container(
        conn=conn,
        students_repo=MySQLStudentRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        billing_repo=MySQLBillingRepository(conn),
        payments_repo=MySQLPaymentRepository(conn),
        pending_policy=pending_policy,
        min_notice_days=min_notice_days,
        currency_symbol=currency_symbol,
    )
