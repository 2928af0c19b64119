from __future__ import annotations

import json
from dataclasses import asdict
from typing import Sequence

from ..core.constants import DEFAULT_NOTIFICATION_LIMIT
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Notification, Payload, payload_from_dict
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, payload: Payload) -> Notification:
        with db_cursor(self._conn_factory) as (_, cur):
            # Gapless sequence: AUTO_INCREMENT would skip ids of rolled-back calls.
            cur.execute("SELECT COALESCE(MAX(sequence), 0) AS last_seq FROM notifications FOR UPDATE")
            r = fetchone(cur)
            sequence = int(r["last_seq"]) + 1 if r else 1
            cur.execute(
                "INSERT INTO notifications(sequence, kind, payload) VALUES(%s,%s,%s)",
                (sequence, payload.kind.value, json.dumps(asdict(payload))),
            )
            return Notification(sequence=sequence, payload=payload)

    def list_after(self, after_sequence: int = 0, *, limit: int = DEFAULT_NOTIFICATION_LIMIT) -> Sequence[Notification]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT sequence, kind, payload
                FROM notifications
                WHERE sequence > %s
                ORDER BY sequence ASC
                LIMIT %s
                """,
                (int(after_sequence), int(limit)),
            )
            rows = fetchall(cur)
            out: list[Notification] = []
            for r in rows:
                data = r["payload"]
                if isinstance(data, (bytes, bytearray, str)):
                    data = json.loads(data)
                out.append(Notification(sequence=int(r["sequence"]), payload=payload_from_dict(r["kind"], data)))
            return out
