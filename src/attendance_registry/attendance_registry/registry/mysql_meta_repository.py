from __future__ import annotations

from typing import Optional

from ..core.constants import REGISTRY_META_ROW_ID
from ..core.exceptions import RegistryConfigurationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import RegistryMetaRepository


class MySQLRegistryMetaRepository(RegistryMetaRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_admin(self) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT admin_identity FROM registry_meta WHERE meta_id=%s", (REGISTRY_META_ROW_ID,))
            r = fetchone(cur)
            return r.get("admin_identity") if r else None

    def set_admin(self, identity: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE registry_meta
                SET admin_identity=%s
                WHERE meta_id=%s AND admin_identity IS NULL
                """,
                (identity, REGISTRY_META_ROW_ID),
            )
            if cur.rowcount != 1:
                raise RegistryConfigurationError(
                    "Registry admin is already set (or registry_meta is missing; apply schema.sql first)"
                )
