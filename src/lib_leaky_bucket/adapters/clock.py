"""Clock adapters implementing :class:`ClockPort`."""

from __future__ import annotations

import time

from lib_leaky_bucket.application.ports.time import ClockPort


class MonotonicClock(ClockPort):
    """Seconds from :func:`time.monotonic`; immune to wall-clock adjustments."""

    def now(self) -> float:
        return time.monotonic()


class SystemClock(ClockPort):
    """Seconds since the epoch from :func:`time.time`."""

    def now(self) -> float:
        return time.time()


__all__ = ["MonotonicClock", "SystemClock"]
