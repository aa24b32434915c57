from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..common.datetime_utils import parse_clock_time
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Tuple[Any, Any]]:
    """One short-lived connection per unit of work.

    Commits when the block exits cleanly, rolls back and re-raises otherwise.
    Driver errors are never swallowed here.
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
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def as_bool(value: Any) -> bool:
    """MySQL BOOLEAN columns come back as TINYINT (0/1)."""
    return bool(int(value)) if value is not None else False


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns arrive as timedelta with the pure connector, sometimes as str."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(seconds // 3600, (seconds % 3600) // 60, seconds % 60)
    if isinstance(value, str):
        return parse_clock_time(value)
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
