from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Mapping, Union

from ..core.enums import NotificationKind


@dataclass(frozen=True)
class EventCreated:
    event_id: int
    name: str
    start_time: int
    end_time: int

    kind: ClassVar[NotificationKind] = NotificationKind.EVENT_CREATED


@dataclass(frozen=True)
class ParticipantRegistered:
    identity: str

    kind: ClassVar[NotificationKind] = NotificationKind.PARTICIPANT_REGISTERED


@dataclass(frozen=True)
class AttendanceMarked:
    event_id: int
    identity: str
    timestamp: int

    kind: ClassVar[NotificationKind] = NotificationKind.ATTENDANCE_MARKED


Payload = Union[EventCreated, ParticipantRegistered, AttendanceMarked]

_PAYLOAD_TYPES = {cls.kind: cls for cls in (EventCreated, ParticipantRegistered, AttendanceMarked)}


@dataclass(frozen=True)
class Notification:
    """An entry of the ordered, append-only notification log."""

    sequence: int
    payload: Payload

    @property
    def kind(self) -> NotificationKind:
        return self.payload.kind

    def to_dict(self) -> dict:
        return {"sequence": self.sequence, "kind": self.kind.value, **asdict(self.payload)}


def payload_from_dict(kind: NotificationKind | str, data: Mapping[str, Any]) -> Payload:
    """Rebuild a payload stored as ``kind`` + JSON fields."""
    cls = _PAYLOAD_TYPES[NotificationKind(kind)]
    return cls(**dict(data))
