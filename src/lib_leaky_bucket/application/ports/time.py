"""Port for the clock feeding admission timestamps."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Provide the current time as a float in a consistent unit (seconds)."""

    def now(self) -> float: ...


__all__ = ["ClockPort"]
