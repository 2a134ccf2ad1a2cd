"""Observation record describing one admission decision."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class AdmissionDecision:
    """Immutable record handed to reporters and diagnostic hooks.

    Attributes
    ----------
    identity:
        Key whose bucket was checked.
    allowed:
        ``True`` when the unit of work was admitted.
    requested_at:
        Timestamp supplied by the caller (or the clock).
    effective_time:
        Timestamp recorded in the bucket; differs from ``requested_at`` only
        when the request arrived out of order.
    level:
        Stored bucket level after the decision.
    capacity:
        Burst limit of the limiter that made the decision.
    """

    identity: str
    allowed: bool
    requested_at: float
    effective_time: float
    level: float
    capacity: int

    @property
    def clamped(self) -> bool:
        """Return ``True`` when the request timestamp was older than the bucket."""

        return self.effective_time > self.requested_at

    def to_dict(self) -> dict[str, Any]:
        return {
            "identity": self.identity,
            "allowed": self.allowed,
            "requested_at": self.requested_at,
            "effective_time": self.effective_time,
            "level": self.level,
            "capacity": self.capacity,
        }


__all__ = ["AdmissionDecision"]
