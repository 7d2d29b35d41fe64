from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection

DUPLICATE_KEY_ERRNO = 1062


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)`` inside one transaction.

    Commits when the block exits normally, rolls back on any exception.
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


def in_placeholders(values) -> str:
    return ", ".join(["%s"] * len(values))
