"""Protocols the application layer depends on."""

from __future__ import annotations

from .reporter import DecisionReporterPort
from .store import LimiterStorePort
from .time import ClockPort

__all__ = ["ClockPort", "DecisionReporterPort", "LimiterStorePort"]
