from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Event:
    """Thực thể miền (domain): Sự kiện cần điểm danh.

    Lưu ý: ``active`` luôn là True khi tạo; chưa có thao tác vô hiệu hoá.
    """

    event_id: int
    name: str
    start_time: int
    end_time: int
    active: bool = True

    def is_open_at(self, timestamp: int) -> bool:
        """Inclusive window check: ``start_time <= timestamp <= end_time``."""
        return self.start_time <= timestamp <= self.end_time

    def to_dict(self) -> dict:
        return asdict(self)
