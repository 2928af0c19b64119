from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .core.enums import StorageBackend
from .core.exceptions import RegistryConfigurationError
from .database.connection import DatabaseConnection, DBConfig
from .database.memory import MemoryDatabase
from .events.memory_event_repository import InMemoryEventRepository
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .ledger.clock import Clock, MonotonicClock
from .ledger.transaction import MySQLTransactionManager, TransactionManager
from .notifications.memory_notification_repository import InMemoryNotificationRepository
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .participants.memory_participant_repository import InMemoryParticipantRepository
from .participants.mysql_participant_repository import MySQLParticipantRepository
from .participants.repository import ParticipantRepository
from .registry.memory_meta_repository import InMemoryRegistryMetaRepository
from .registry.mysql_meta_repository import MySQLRegistryMetaRepository
from .registry.repository import RegistryMetaRepository
from .registry.service import AttendanceRegistry


@dataclass(frozen=True)
class Container:
    backend: StorageBackend
    clock: Clock
    transactions: TransactionManager

    events_repo: EventRepository
    participants_repo: ParticipantRepository
    attendance_repo: AttendanceRepository
    notifications_repo: NotificationRepository
    meta_repo: RegistryMetaRepository

    registry: AttendanceRegistry


def build_container(
    *,
    admin_identity: str,
    backend: StorageBackend | str = StorageBackend.MEMORY,
    db_config: Optional[dict] = None,
    memory_db: Optional[MemoryDatabase] = None,
    clock: Optional[Clock] = None,
) -> Container:
    try:
        backend = StorageBackend(backend)
    except ValueError:
        raise RegistryConfigurationError(f"Unknown storage backend: {backend!r}")

    if backend is StorageBackend.MYSQL:
        if not db_config:
            raise RegistryConfigurationError("DB_CONFIG is required for the mysql backend")
        conn = DatabaseConnection(DBConfig.from_dict(db_config))
        transactions: TransactionManager = MySQLTransactionManager(conn)
        events_repo: EventRepository = MySQLEventRepository(conn)
        participants_repo: ParticipantRepository = MySQLParticipantRepository(conn)
        attendance_repo: AttendanceRepository = MySQLAttendanceRepository(conn)
        notifications_repo: NotificationRepository = MySQLNotificationRepository(conn)
        meta_repo: RegistryMetaRepository = MySQLRegistryMetaRepository(conn)
    else:
        db = memory_db if memory_db is not None else MemoryDatabase()
        transactions = db
        events_repo = InMemoryEventRepository(db)
        participants_repo = InMemoryParticipantRepository(db)
        attendance_repo = InMemoryAttendanceRepository(db)
        notifications_repo = InMemoryNotificationRepository(db)
        meta_repo = InMemoryRegistryMetaRepository(db)

    registry = AttendanceRegistry(
        admin=admin_identity,
        events=events_repo,
        participants=participants_repo,
        attendance=attendance_repo,
        notifications=notifications_repo,
        meta=meta_repo,
        transactions=transactions,
    )

    return Container(
        backend=backend,
        clock=clock or MonotonicClock(),
        transactions=transactions,
        events_repo=events_repo,
        participants_repo=participants_repo,
        attendance_repo=attendance_repo,
        notifications_repo=notifications_repo,
        meta_repo=meta_repo,
        registry=registry,
    )
