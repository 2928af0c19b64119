from __future__ import annotations

from typing import Optional

from ..core.exceptions import RegistryConfigurationError
from ..database.memory import MemoryDatabase
from .repository import RegistryMetaRepository


class InMemoryRegistryMetaRepository(RegistryMetaRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get_admin(self) -> Optional[str]:
        with self._db.reading():
            return self._db.admin

    def set_admin(self, identity: str) -> None:
        with self._db.atomic():
            if self._db.admin is not None:
                raise RegistryConfigurationError("Registry admin is already set")
            self._db.admin = identity
