from __future__ import annotations

from mysql.connector import errorcode
from mysql.connector import errors as mysql_errors

from ..core.exceptions import AlreadyRegistered
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import ParticipantRepository


class MySQLParticipantRepository(ParticipantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def is_registered(self, identity: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM participants WHERE identity=%s", (identity,))
            return fetchone(cur) is not None

    def add(self, identity: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute("INSERT INTO participants(identity) VALUES(%s)", (identity,))
            except mysql_errors.IntegrityError as e:
                if e.errno != errorcode.ER_DUP_ENTRY:
                    raise
                raise AlreadyRegistered(f"{identity} is already registered") from e

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM participants")
            r = fetchone(cur)
            return int(r["total"]) if r else 0
