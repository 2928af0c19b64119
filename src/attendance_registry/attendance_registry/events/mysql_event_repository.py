from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import REGISTRY_META_ROW_ID
from ..core.exceptions import RegistryConfigurationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Event
from .repository import EventRepository


def _row_to_event(r: dict) -> Event:
    return Event(
        event_id=int(r["event_id"]),
        name=r["name"],
        start_time=int(r["start_time"]),
        end_time=int(r["end_time"]),
        active=bool(r["active"]),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: int) -> Optional[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT event_id, name, start_time, end_time, active
                FROM events
                WHERE event_id=%s
                """,
                (int(event_id),),
            )
            r = fetchone(cur)
            return _row_to_event(r) if r else None

    def list_all(self) -> Sequence[Event]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT event_id, name, start_time, end_time, active FROM events ORDER BY event_id ASC")
            return [_row_to_event(r) for r in fetchall(cur)]

    def current_counter(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT event_counter FROM registry_meta WHERE meta_id=%s", (REGISTRY_META_ROW_ID,))
            r = fetchone(cur)
            return int(r["event_counter"]) if r else 0

    def create(self, *, name: str, start_time: int, end_time: int) -> Event:
        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock on the counter serializes concurrent creations.
            cur.execute(
                "SELECT event_counter FROM registry_meta WHERE meta_id=%s FOR UPDATE",
                (REGISTRY_META_ROW_ID,),
            )
            r = fetchone(cur)
            if not r:
                raise RegistryConfigurationError("registry_meta row is missing; apply schema.sql first")

            event_id = int(r["event_counter"]) + 1
            cur.execute(
                "UPDATE registry_meta SET event_counter=%s WHERE meta_id=%s",
                (event_id, REGISTRY_META_ROW_ID),
            )
            cur.execute(
                """
                INSERT INTO events(event_id, name, start_time, end_time, active)
                VALUES(%s,%s,%s,%s,1)
                """,
                (event_id, name, int(start_time), int(end_time)),
            )
            return Event(event_id=event_id, name=name, start_time=int(start_time), end_time=int(end_time), active=True)
