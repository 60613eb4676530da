from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import to_calendar_date
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import fetch_all, fetch_one, transaction
from .model import Student
from .repository import StudentRepository

_COLUMNS = """
    hostel_id, name, department, program, semester, role,
    registration_date, is_approved, needs_bill_refresh
"""


def row_to_student(row: Dict[str, Any]) -> Student:
    return Student(
        hostel_id=row["hostel_id"],
        name=row["name"],
        department=row["department"],
        program=row.get("program"),
        semester=int(row.get("semester") or 1),
        role=Role(row["role"]),
        registration_date=to_calendar_date(row["registration_date"]),
        is_approved=bool(row.get("is_approved")),
        needs_bill_refresh=bool(row.get("needs_bill_refresh")),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_hostel_id(self, hostel_id: str) -> Optional[Student]:
        with transaction(self._conn_factory) as cur:
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE hostel_id=%s", (hostel_id,))
            row = fetch_one(cur)
            return row_to_student(row) if row else None

    def list_non_admin(self) -> Sequence[Student]:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE role<>%s ORDER BY hostel_id",
                (Role.ADMIN.value,),
            )
            return [row_to_student(r) for r in fetch_all(cur)]
