from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.validators import require_identity
from ..core.constants import DEFAULT_NOTIFICATION_LIMIT
from ..core.exceptions import (
    AlreadyMarked,
    AlreadyRegistered,
    EventNotActive,
    InvalidTimeRange,
    OutsideEventWindow,
    RegistryConfigurationError,
    Unauthorized,
)
from ..events.model import Event
from ..events.repository import EventRepository
from ..ledger.transaction import TransactionManager
from ..notifications.model import AttendanceMarked, EventCreated, Notification, ParticipantRegistered
from ..notifications.repository import NotificationRepository
from ..participants.repository import ParticipantRepository
from .repository import RegistryMetaRepository

logger = logging.getLogger(__name__)

NotificationListener = Callable[[Notification], None]


class AttendanceRegistry:
    """Use case: create events, allow-list participants, record attendance once.

    Every mutating call runs inside ``transactions.atomic()``: checks and writes
    happen in one isolated step, and a rejected call leaves no state behind.
    Caller identity and the current time are passed in explicitly by the
    hosting application (sourced from its ledger / execution context).
    """

    def __init__(
        self,
        *,
        admin: str,
        events: EventRepository,
        participants: ParticipantRepository,
        attendance: AttendanceRepository,
        notifications: NotificationRepository,
        meta: RegistryMetaRepository,
        transactions: TransactionManager,
    ):
        self._admin = require_identity(admin, "admin")
        self._events = events
        self._participants = participants
        self._attendance = attendance
        self._notifications = notifications
        self._meta = meta
        self._transactions = transactions
        self._listeners: List[NotificationListener] = []

        with self._transactions.atomic():
            stored = self._meta.get_admin()
            if stored is None:
                self._meta.set_admin(self._admin)
            elif stored != self._admin:
                raise RegistryConfigurationError(
                    f"Store already belongs to admin {stored!r}; refusing to start as {self._admin!r}"
                )

    # ----- read projections -------------------------------------------------

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def event_counter(self) -> int:
        return self._events.current_counter()

    def is_admin(self, identity: str) -> bool:
        return identity == self._admin

    def get_event(self, event_id: int) -> Optional[Event]:
        return self._events.get_by_id(event_id)

    def list_events(self) -> Sequence[Event]:
        return self._events.list_all()

    def get_attendance(self, event_id: int, identity: str) -> Optional[AttendanceRecord]:
        return self._attendance.get(event_id, identity)

    def list_attendance(self, event_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_event(event_id)

    def is_registered(self, identity: str) -> bool:
        return self._participants.is_registered(identity)

    def participant_count(self) -> int:
        return self._participants.count()

    def notifications(self, after_sequence: int = 0, *, limit: int = DEFAULT_NOTIFICATION_LIMIT) -> Sequence[Notification]:
        return self._notifications.list_after(after_sequence, limit=limit)

    def subscribe(self, listener: NotificationListener) -> None:
        """Call ``listener`` with every notification once its call has committed."""
        self._listeners.append(listener)

    # ----- operations -------------------------------------------------------

    def create_event(self, *, caller: str, name: str, start_time: int, end_time: int) -> int:
        if not self.is_admin(caller):
            raise Unauthorized("Only the admin can create events")
        if end_time <= start_time:
            raise InvalidTimeRange(f"end_time ({end_time}) must be after start_time ({start_time})")

        with self._transactions.atomic():
            event = self._events.create(name=name, start_time=start_time, end_time=end_time)
            notification = self._notifications.append(
                EventCreated(
                    event_id=event.event_id,
                    name=event.name,
                    start_time=event.start_time,
                    end_time=event.end_time,
                )
            )

        logger.info("Event %s created: %r [%s, %s]", event.event_id, name, start_time, end_time)
        self._publish(notification)
        return event.event_id

    def register_participant(self, *, caller: str, identity: str) -> None:
        if not self.is_admin(caller):
            raise Unauthorized("Only the admin can register participants")
        require_identity(identity)

        with self._transactions.atomic():
            if self._participants.is_registered(identity):
                raise AlreadyRegistered(f"{identity} is already registered")
            self._participants.add(identity)
            notification = self._notifications.append(ParticipantRegistered(identity=identity))

        logger.info("Participant %s registered", identity)
        self._publish(notification)

    def mark_attendance(
        self,
        *,
        caller: str,
        now: int,
        event_id: int,
        location: str,
        metadata: str = "",
    ) -> AttendanceRecord:
        with self._transactions.atomic():
            if not self._participants.is_registered(caller):
                raise Unauthorized("Only registered participants can mark attendance")

            event = self._events.get_by_id(event_id)
            if event is None or not event.active:
                raise EventNotActive(f"Event {event_id} is not active")

            if not event.is_open_at(now):
                raise OutsideEventWindow(
                    f"Time {now} is outside event {event_id} window [{event.start_time}, {event.end_time}]"
                )

            if self._attendance.get(event_id, caller) is not None:
                raise AlreadyMarked(f"{caller} already marked attendance for event {event_id}")

            record = AttendanceRecord(
                event_id=event.event_id,
                identity=caller,
                timestamp=now,
                location=location,
                metadata=metadata,
            )
            self._attendance.insert(record)
            notification = self._notifications.append(
                AttendanceMarked(event_id=record.event_id, identity=caller, timestamp=now)
            )

        logger.info("Attendance marked: event=%s identity=%s at %s", event_id, caller, now)
        self._publish(notification)
        return record

    def _publish(self, notification: Notification) -> None:
        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception:
                # Already committed; listener errors are only logged.
                logger.exception("Notification listener %r failed on #%s", listener, notification.sequence)
