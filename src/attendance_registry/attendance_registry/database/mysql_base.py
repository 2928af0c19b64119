from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, List, Optional

from .connection import DatabaseConnection

_bound_connection: ContextVar[Optional[Any]] = ContextVar("attendance_registry_bound_connection", default=None)


@contextmanager
def transaction(conn_factory: DatabaseConnection) -> Iterator[Any]:
    """Bind one connection for the block; commit at the end, roll back on error.

    ``db_cursor`` calls made inside the block share the bound connection and
    leave commit/rollback to this context. Nested blocks join the outer one.
    """

    bound = _bound_connection.get()
    if bound is not None:
        yield bound
        return

    conn = conn_factory.connect()
    token = _bound_connection.set(conn)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        _bound_connection.reset(token)
        conn.close()


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    bound = _bound_connection.get()
    if bound is not None:
        cur = bound.cursor(dictionary=dictionary)
        try:
            yield bound, cur
        finally:
            cur.close()
        return

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
