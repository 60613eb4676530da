from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import to_calendar_date, to_utc_datetime
from ..database.connection import DatabaseConnection
from ..database.mysql_base import fetch_all, fetch_one, to_db_datetime, transaction
from .model import Leave
from .repository import LeaveRepository


def _row_to_leave(r: Dict[str, Any]) -> Leave:
    return Leave(
        leave_id=int(r["leave_id"]),
        hostel_id=r["hostel_id"],
        from_date=to_calendar_date(r["from_date"]),
        to_date=to_calendar_date(r["to_date"]),
        approved=bool(r["approved"]),
        applied_on=to_utc_datetime(r["applied_on"]),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, hostel_id: str, from_date: date, to_date: date, applied_on: datetime) -> Leave:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                INSERT INTO leaves(hostel_id, from_date, to_date, approved, applied_on)
                VALUES(%s,%s,%s,0,%s)
                """,
                (hostel_id, from_date, to_date, to_db_datetime(applied_on)),
            )
            return Leave(
                leave_id=int(cur.lastrowid),
                hostel_id=hostel_id,
                from_date=from_date,
                to_date=to_date,
                approved=False,
                applied_on=applied_on,
            )

    def get(self, leave_id: int) -> Optional[Leave]:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT leave_id, hostel_id, from_date, to_date, approved, applied_on
                FROM leaves
                WHERE leave_id=%s
                """,
                (int(leave_id),),
            )
            r = fetch_one(cur)
            return _row_to_leave(r) if r else None

    def mark_approved(self, leave_id: int) -> bool:
        with transaction(self._conn_factory) as cur:
            cur.execute("UPDATE leaves SET approved=1 WHERE leave_id=%s AND approved=0", (int(leave_id),))
            return cur.rowcount > 0

    def list_for_student(self, hostel_id: str) -> Sequence[Leave]:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT leave_id, hostel_id, from_date, to_date, approved, applied_on
                FROM leaves
                WHERE hostel_id=%s
                ORDER BY applied_on DESC, leave_id DESC
                """,
                (hostel_id,),
            )
            return [_row_to_leave(r) for r in fetch_all(cur)]

    def list_for_students(self, hostel_ids: Sequence[str]) -> dict[str, list[Leave]]:
        if not hostel_ids:
            return {}
        placeholders = ",".join(["%s"] * len(hostel_ids))
        with transaction(self._conn_factory) as cur:
            cur.execute(
                f"""
                SELECT leave_id, hostel_id, from_date, to_date, approved, applied_on
                FROM leaves
                WHERE hostel_id IN ({placeholders})
                ORDER BY leave_id
                """,
                tuple(hostel_ids),
            )
            out: dict[str, list[Leave]] = {}
            for r in fetch_all(cur):
                leave = _row_to_leave(r)
                out.setdefault(leave.hostel_id, []).append(leave)
            return out

    def list_pending(self, *, limit: int = 500) -> Sequence[dict]:
        with transaction(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT l.leave_id, l.hostel_id, s.name, s.program,
                       l.from_date, l.to_date, l.applied_on
                FROM leaves l
                JOIN students s ON s.hostel_id = l.hostel_id
                WHERE l.approved=0
                ORDER BY l.applied_on ASC
                LIMIT %s
                """,
                (int(limit),),
            )
            out: list[dict] = []
            for r in fetch_all(cur):
                from_date = to_calendar_date(r["from_date"])
                to_date = to_calendar_date(r["to_date"])
                out.append(
                    {
                        "leave_id": int(r["leave_id"]),
                        "hostel_id": r["hostel_id"],
                        "name": r["name"],
                        "program": (r.get("program") or "").upper() or "-",
                        "from": from_date.strftime("%Y-%m-%d"),
                        "to": to_date.strftime("%Y-%m-%d"),
                        "days": (to_date - from_date).days + 1,
                        "applied_on": r["applied_on"].strftime("%Y-%m-%d %H:%M"),
                        "status": "Pending",
                    }
                )
            return out
