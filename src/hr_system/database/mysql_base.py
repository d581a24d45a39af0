from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` inside one transaction.

    Commits when the block exits cleanly, rolls back and re-raises otherwise.
    """
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def is_duplicate_key(exc: Exception) -> bool:
    """True when ``exc`` is a unique-key violation raised by MySQL."""
    return isinstance(exc, IntegrityError) and getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


def to_decimal(value: Any) -> Optional[Decimal]:
    """Normalize DECIMAL columns across connector implementations (Decimal, str, float)."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
