from __future__ import annotations

import time
from datetime import datetime, timezone


def now_timestamp() -> int:
    """Current time in whole seconds since the epoch.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return int(time.time())


def format_timestamp(value: int) -> str:
    """Render epoch seconds as an ISO-8601 UTC string (used by exports)."""
    return datetime.fromtimestamp(int(value), tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
