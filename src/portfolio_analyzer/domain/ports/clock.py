"""Port: clock — lets time-bucketed scoring run against a fixed instant."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    """Source of the current, timezone-aware time."""

    def now(self) -> datetime:
        ...
