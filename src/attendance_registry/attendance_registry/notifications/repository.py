from __future__ import annotations

from typing import Protocol, Sequence

from ..core.constants import DEFAULT_NOTIFICATION_LIMIT
from .model import Notification, Payload


class NotificationRepository(Protocol):
    def append(self, payload: Payload) -> Notification:
        """Store ``payload`` under the next sequence number (1, 2, 3, ...)."""

        raise NotImplementedError

    def list_after(self, after_sequence: int = 0, *, limit: int = DEFAULT_NOTIFICATION_LIMIT) -> Sequence[Notification]:
        raise NotImplementedError
