"""Wall-clock implementation of the Clock port."""

from __future__ import annotations

from datetime import datetime, timezone


class SystemClock:
    """Returns the current UTC time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
