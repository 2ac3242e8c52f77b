from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Source of press timestamps.

    The puzzle never sleeps or schedules anything; it only stamps events.
    """

    def now(self) -> float:
        """Return monotonic seconds."""


class RealClock:
    """Wall-independent clock for a running game (time.monotonic())."""

    def now(self) -> float:
        return time.monotonic()
