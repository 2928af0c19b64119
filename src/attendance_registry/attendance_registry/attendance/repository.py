from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get(self, event_id: int, identity: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> None:
        """Insert-or-reject: raises ``AlreadyMarked`` when the key already has a record."""

        raise NotImplementedError

    def list_for_event(self, event_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
