from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Type

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError
from .connection import DatabaseConnection


@contextmanager
def transaction(conn_factory: DatabaseConnection) -> Iterator[Any]:
    """Dict cursor on a fresh connection; everything inside commits or rolls back together."""
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=True)
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


@contextmanager
def unique_violation(error_type: Type[ConflictError], message: str) -> Iterator[None]:
    """Turn a duplicate-key IntegrityError into ``error_type(message)``."""
    try:
        yield
    except mysql.connector.IntegrityError as exc:
        if getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY:
            raise error_type(message) from exc
        raise


def fetch_one(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetch_all(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def to_db_datetime(value: datetime) -> datetime:
    # DATETIME columns hold naive UTC
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
