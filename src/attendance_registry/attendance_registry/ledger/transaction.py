from __future__ import annotations

from typing import ContextManager, Protocol

from ..database.connection import DatabaseConnection
from ..database.mysql_base import transaction


class TransactionManager(Protocol):
    """All-or-nothing commit of the registry state touched by one call.

    ``MemoryDatabase`` satisfies this protocol directly.
    """

    def atomic(self) -> ContextManager[object]:
        raise NotImplementedError


class MySQLTransactionManager(TransactionManager):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def atomic(self) -> ContextManager[object]:
        return transaction(self._conn_factory)
