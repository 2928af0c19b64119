from __future__ import annotations

import threading
from typing import Callable, Protocol

from ..common.datetime_utils import now_timestamp


class Clock(Protocol):
    def now(self) -> int:
        raise NotImplementedError


class MonotonicClock(Clock):
    """Integer-second clock that never runs backwards.

    A wall clock stepped back (NTP, manual change) keeps reporting the last
    value it handed out until real time catches up.
    """

    def __init__(self, source: Callable[[], int] = now_timestamp):
        self._source = source
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            current = max(int(self._source()), self._last)
            self._last = current
            return current
