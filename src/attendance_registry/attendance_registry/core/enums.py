from __future__ import annotations

from enum import Enum


class NotificationKind(str, Enum):
    """Loại thông báo được ghi vào nhật ký (append-only)."""

    EVENT_CREATED = "EventCreated"
    PARTICIPANT_REGISTERED = "ParticipantRegistered"
    ATTENDANCE_MARKED = "AttendanceMarked"


class StorageBackend(str, Enum):
    """Where the registry tables live."""

    MEMORY = "memory"
    MYSQL = "mysql"
