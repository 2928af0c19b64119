from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Event


class EventRepository(Protocol):
    """Giao diện repository cho Event.

    Events are created once and never updated or deleted.
    """

    def get_by_id(self, event_id: int) -> Optional[Event]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Event]:
        raise NotImplementedError

    def current_counter(self) -> int:
        raise NotImplementedError

    def create(self, *, name: str, start_time: int, end_time: int) -> Event:
        """Bump the event counter and store an active event under the new id."""

        raise NotImplementedError
