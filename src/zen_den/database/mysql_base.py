from __future__ import annotations

from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import StoreError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor) on a fresh connection, committing on success.

    Connector errors surface as StoreError so callers above the repository
    layer never depend on mysql.connector.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise StoreError(f"Could not connect to the visits store: {exc}") from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        conn.rollback()
        raise StoreError(str(exc)) from exc
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


def contains_pattern(value: str) -> str:
    """LIKE pattern matching ``value`` anywhere, with wildcards escaped."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def normalize_mysql_date(value: Any) -> date:
    """DATE columns come back as date, or as str from some connector builds."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])
    raise TypeError(f"Unsupported MySQL DATE value type: {type(value)!r}")


def normalize_mysql_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.strip())
    raise TypeError(f"Unsupported MySQL DATETIME value type: {type(value)!r}")
