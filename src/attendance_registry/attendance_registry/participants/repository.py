from __future__ import annotations

from typing import Protocol


class ParticipantRepository(Protocol):
    """Grow-only set of identities allowed to mark attendance."""

    def is_registered(self, identity: str) -> bool:
        raise NotImplementedError

    def add(self, identity: str) -> None:
        """Insert-or-reject: raises ``AlreadyRegistered`` for a known identity."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
