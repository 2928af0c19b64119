from __future__ import annotations

from typing import Optional, Sequence

from mysql.connector import errorcode
from mysql.connector import errors as mysql_errors

from ..core.exceptions import AlreadyMarked
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        event_id=int(r["event_id"]),
        identity=r["identity"],
        timestamp=int(r["marked_at"]),
        location=r["location"],
        metadata=r.get("metadata") or "",
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, event_id: int, identity: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, identity, marked_at, location, metadata
                FROM attendance_records
                WHERE event_id=%s AND identity=%s
                """,
                (int(event_id), identity),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def insert(self, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO attendance_records(event_id, identity, marked_at, location, metadata)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (record.event_id, record.identity, record.timestamp, record.location, record.metadata),
                )
            except mysql_errors.IntegrityError as e:
                if e.errno != errorcode.ER_DUP_ENTRY:
                    raise
                raise AlreadyMarked(
                    f"{record.identity} already marked attendance for event {record.event_id}"
                ) from e

    def list_for_event(self, event_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, identity, marked_at, location, metadata
                FROM attendance_records
                WHERE event_id=%s
                ORDER BY record_order ASC
                """,
                (int(event_id),),
            )
            return [_row_to_record(r) for r in fetchall(cur)]
