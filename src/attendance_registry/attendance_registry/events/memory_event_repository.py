from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory import MemoryDatabase
from .model import Event
from .repository import EventRepository


class InMemoryEventRepository(EventRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get_by_id(self, event_id: int) -> Optional[Event]:
        with self._db.reading():
            return self._db.events.get(int(event_id))

    def list_all(self) -> Sequence[Event]:
        with self._db.reading():
            return [self._db.events[k] for k in sorted(self._db.events)]

    def current_counter(self) -> int:
        with self._db.reading():
            return self._db.event_counter

    def create(self, *, name: str, start_time: int, end_time: int) -> Event:
        with self._db.atomic():
            event_id = self._db.event_counter + 1
            event = Event(event_id=event_id, name=name, start_time=int(start_time), end_time=int(end_time), active=True)
            self._db.event_counter = event_id
            self._db.events[event_id] = event
            return event
