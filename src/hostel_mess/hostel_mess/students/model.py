from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Student:
    """Domain entity: a hostel resident (or the warden's admin account).

    Note: Plain data object, no DB access code here.
    """

    hostel_id: str
    name: str
    department: str
    program: Optional[str]
    semester: int
    role: Role
    registration_date: date
    is_approved: bool = False
    needs_bill_refresh: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
