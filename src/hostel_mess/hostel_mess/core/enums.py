from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization checks."""

    ADMIN = "admin"
    STUDENT = "student"


class PendingLeavePolicy(str, Enum):
    """How unapproved leave days are counted for billing."""

    ABSENT = "absent"
    PRESENT = "present"


class PaymentStatus(str, Enum):
    """Only confirmed payments are recorded; the gateway owns the earlier states."""

    COMPLETED = "COMPLETED"
