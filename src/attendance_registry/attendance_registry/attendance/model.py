from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi điểm danh, ghi một lần cho mỗi (event, identity)."""

    event_id: int
    identity: str
    timestamp: int
    location: str
    metadata: str = ""

    @property
    def key(self) -> tuple[int, str]:
        return (self.event_id, self.identity)

    def to_dict(self) -> dict:
        return asdict(self)
