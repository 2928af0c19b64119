from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ..attendance.model import AttendanceRecord
from ..events.model import Event
from ..notifications.model import Notification


@dataclass
class _Snapshot:
    admin: Optional[str]
    event_counter: int
    events: Dict[int, Event]
    participants: Set[str]
    attendance: Dict[Tuple[int, str], AttendanceRecord]
    notifications: List[Notification]


@dataclass
class MemoryDatabase:
    """Process-local registry tables (tests, demos, single-process deployments).

    ``atomic()`` serializes callers on one lock and restores the tables when
    the block raises, so a failed call leaves no trace. Reads go through
    ``reading()`` so they never see a table mid-write or a call that is
    about to roll back.
    """

    admin: Optional[str] = None
    event_counter: int = 0
    events: Dict[int, Event] = field(default_factory=dict)
    participants: Set[str] = field(default_factory=set)
    attendance: Dict[Tuple[int, str], AttendanceRecord] = field(default_factory=dict)
    notifications: List[Notification] = field(default_factory=list)

    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)
    _depth: int = field(default=0, repr=False, compare=False)

    def _snapshot(self) -> _Snapshot:
        # Stored values are frozen dataclasses, shallow copies are enough.
        return _Snapshot(
            admin=self.admin,
            event_counter=self.event_counter,
            events=dict(self.events),
            participants=set(self.participants),
            attendance=dict(self.attendance),
            notifications=list(self.notifications),
        )

    def _restore(self, snap: _Snapshot) -> None:
        self.admin = snap.admin
        self.event_counter = snap.event_counter
        self.events = snap.events
        self.participants = snap.participants
        self.attendance = snap.attendance
        self.notifications = snap.notifications

    @contextmanager
    def reading(self) -> Iterator[None]:
        with self._lock:
            yield

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                return

            snap = self._snapshot()
            self._depth = 1
            try:
                yield
            except BaseException:
                self._restore(snap)
                raise
            finally:
                self._depth = 0
