from __future__ import annotations

from ..core.exceptions import AlreadyRegistered
from ..database.memory import MemoryDatabase
from .repository import ParticipantRepository


class InMemoryParticipantRepository(ParticipantRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def is_registered(self, identity: str) -> bool:
        with self._db.reading():
            return identity in self._db.participants

    def add(self, identity: str) -> None:
        with self._db.atomic():
            if identity in self._db.participants:
                raise AlreadyRegistered(f"{identity} is already registered")
            self._db.participants.add(identity)

    def count(self) -> int:
        with self._db.reading():
            return len(self._db.participants)
