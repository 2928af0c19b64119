from __future__ import annotations

from typing import Sequence

from ..core.constants import DEFAULT_NOTIFICATION_LIMIT
from ..database.memory import MemoryDatabase
from .model import Notification, Payload
from .repository import NotificationRepository


class InMemoryNotificationRepository(NotificationRepository):
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def append(self, payload: Payload) -> Notification:
        with self._db.atomic():
            notification = Notification(sequence=len(self._db.notifications) + 1, payload=payload)
            self._db.notifications.append(notification)
            return notification

    def list_after(self, after_sequence: int = 0, *, limit: int = DEFAULT_NOTIFICATION_LIMIT) -> Sequence[Notification]:
        # sequence n sits at index n-1
        start = max(int(after_sequence), 0)
        with self._db.reading():
            return list(self._db.notifications[start : start + max(int(limit), 0)])
