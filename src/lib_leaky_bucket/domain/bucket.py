"""Per-identity bucket records.

Purpose
-------
Provide the immutable value objects describing how full one identity's bucket
is and when that level was last valid.

Contents
--------
* :class:`BucketState` - the stored level plus its timestamp.
* :class:`BucketInfo` - debug projection pairing a bucket with the limiter
  configuration it belongs to.

System Role
-----------
Leaf of the domain layer; :mod:`lib_leaky_bucket.domain.limiter` replaces these
records on every admission check and never mutates them in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class BucketState:
    """Accumulated load for a single identity.

    Attributes
    ----------
    level:
        Amount of "water" currently held; never negative.
    last_update_time:
        Caller-supplied timestamp at which ``level`` was last valid.
    """

    level: float
    last_update_time: float

    def __post_init__(self) -> None:
        if self.level < 0:
            raise ValueError("level must not be negative")
        object.__setattr__(self, "level", float(self.level))
        object.__setattr__(self, "last_update_time", float(self.last_update_time))

    def to_dict(self) -> dict[str, float]:
        """Return a plain dictionary suitable for structured logging."""

        return {"level": self.level, "last_update_time": self.last_update_time}


@dataclass(slots=True, frozen=True)
class BucketInfo:
    """Stored bucket reported together with the limiter configuration."""

    level: float
    last_update_time: float
    capacity: int
    leak_rate: float

    @property
    def headroom(self) -> float:
        """Return how many units could still be added before reaching capacity."""

        return self.capacity - self.level

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "last_update_time": self.last_update_time,
            "capacity": self.capacity,
            "leak_rate": self.leak_rate,
        }


__all__ = ["BucketInfo", "BucketState"]
