"""Concrete adapters for clocks, state stores, and console reporting."""

from __future__ import annotations

from .clock import MonotonicClock, SystemClock
from .console import RichConsoleReporter
from .store import LockedLimiterStore, ShardedLimiterStore

__all__ = [
    "LockedLimiterStore",
    "MonotonicClock",
    "RichConsoleReporter",
    "ShardedLimiterStore",
    "SystemClock",
]
