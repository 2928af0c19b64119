from __future__ import annotations

from typing import Optional, Sequence

from ..core.exceptions import AlreadyMarked
from ..database.memory import MemoryDatabase
from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get(self, event_id: int, identity: str) -> Optional[AttendanceRecord]:
        with self._db.reading():
            return self._db.attendance.get((int(event_id), identity))

    def insert(self, record: AttendanceRecord) -> None:
        with self._db.atomic():
            if record.key in self._db.attendance:
                raise AlreadyMarked(f"{record.identity} already marked attendance for event {record.event_id}")
            self._db.attendance[record.key] = record

    def list_for_event(self, event_id: int) -> Sequence[AttendanceRecord]:
        # dicts keep insertion order, i.e. mark order
        with self._db.reading():
            return [r for r in self._db.attendance.values() if r.event_id == int(event_id)]
