"""Leaky-bucket limiter state and its pure transition functions.

Purpose
-------
Hold one :class:`BucketState` per identity under a shared configuration and
derive admission decisions from how far each bucket has drained.

Contents
--------
* :class:`LimiterState` - immutable snapshot of configuration plus buckets.
* :class:`AdmissionResult` - ``(allowed, state)`` pair returned by :func:`admit`.
* :func:`create`, :func:`admit`, :func:`inspect`, :func:`describe` - the
  operations callers thread a state through.

System Role
-----------
The only place the leak/decision algorithm lives. Every other layer (stores,
runtime façade, CLI) delegates to these functions and merely decides where the
returned state is published.

Examples
--------
>>> state = create(2, 1.0)
>>> allowed, state = admit(state, "u1", 0.0)
>>> allowed
True
>>> allowed, state = admit(state, "u1", 0.0)
>>> allowed
True
>>> admit(state, "u1", 0.0).allowed
False
>>> inspect(state, "u1")
BucketState(level=2.0, last_update_time=0.0)
>>> inspect(state, "never_seen") is None
True
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, NamedTuple

from .bucket import BucketInfo, BucketState
from .errors import InvalidConfiguration

UNIT_COST = 1.0
"""Capacity consumed by one admitted unit of work."""


@dataclass(slots=True, frozen=True)
class LimiterState:
    """Immutable limiter snapshot.

    Attributes
    ----------
    capacity:
        Burst limit shared by every bucket in this lineage.
    leak_rate:
        Units drained per unit of elapsed time.
    buckets:
        Read-only mapping from identity to its stored :class:`BucketState`.
        A missing identity has never been checked.
    """

    capacity: int
    leak_rate: float
    buckets: Mapping[str, BucketState] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "buckets", MappingProxyType(dict(self.buckets)))

    def with_bucket(self, identity: str, bucket: BucketState) -> "LimiterState":
        """Return a copy with ``identity`` mapped to ``bucket``."""

        updated = dict(self.buckets)
        updated[identity] = bucket
        return LimiterState(capacity=self.capacity, leak_rate=self.leak_rate, buckets=updated)

    @property
    def identities(self) -> tuple[str, ...]:
        return tuple(self.buckets)

    def __contains__(self, identity: object) -> bool:
        return identity in self.buckets

    def __hash__(self) -> int:
        return hash((self.capacity, self.leak_rate, frozenset(self.buckets.items())))


class AdmissionResult(NamedTuple):
    """Outcome of :func:`admit`; unpacks as ``allowed, state``."""

    allowed: bool
    state: LimiterState


def create(capacity: int, leak_rate: float) -> LimiterState:
    """Return an empty limiter configured with ``capacity`` and ``leak_rate``.

    Raises
    ------
    InvalidConfiguration
        When ``capacity`` is not a positive integer or ``leak_rate`` is not a
        positive, finite number.

    Examples
    --------
    >>> create(5, 1.0).capacity
    5
    >>> create(0, 1.0)
    Traceback (most recent call last):
    ...
    lib_leaky_bucket.domain.errors.InvalidConfiguration: capacity must be positive (got 0)
    """

    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise InvalidConfiguration(f"capacity must be an integer (got {capacity!r})")
    if capacity <= 0:
        raise InvalidConfiguration(f"capacity must be positive (got {capacity!r})")
    if isinstance(leak_rate, bool) or not isinstance(leak_rate, (int, float)):
        raise InvalidConfiguration(f"leak_rate must be a number (got {leak_rate!r})")
    if not math.isfinite(leak_rate):
        raise InvalidConfiguration(f"leak_rate must be finite (got {leak_rate!r})")
    if leak_rate <= 0:
        raise InvalidConfiguration(f"leak_rate must be positive (got {leak_rate!r})")
    return LimiterState(capacity=capacity, leak_rate=float(leak_rate))


def _leak(bucket: BucketState, timestamp: float, leak_rate: float) -> BucketState:
    """Drain ``bucket`` up to ``timestamp``, clamping the clock to never run backwards."""

    effective_time = max(bucket.last_update_time, timestamp)
    elapsed = effective_time - bucket.last_update_time
    level = max(0.0, bucket.level - elapsed * leak_rate)
    return BucketState(level=level, last_update_time=effective_time)


def admit(state: LimiterState, identity: str, timestamp: float) -> AdmissionResult:
    """Decide whether ``identity`` may proceed at ``timestamp``.

    The bucket first leaks for the time elapsed since its last update (an
    earlier ``timestamp`` counts as no elapsed time). The request is admitted
    when one more unit still fits within ``capacity``; a denied request keeps
    the drained level and does not add its unit. Either way the drained bucket
    is committed, so the returned state always reflects this check.

    ``state`` itself is never modified.

    Raises
    ------
    TypeError
        When ``timestamp`` is not an ``int`` or ``float``.
    ValueError
        When ``timestamp`` is NaN or infinite.

    Examples
    --------
    >>> admit(create(1, 1.0), "u1", float("nan"))
    Traceback (most recent call last):
    ...
    ValueError: timestamp must be finite (got nan)
    """

    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        raise TypeError(f"timestamp must be a real number (got {timestamp!r})")
    if not math.isfinite(timestamp):
        raise ValueError(f"timestamp must be finite (got {timestamp!r})")
    timestamp = float(timestamp)
    current = state.buckets.get(identity)
    if current is None:
        current = BucketState(level=0.0, last_update_time=timestamp)

    drained = _leak(current, timestamp, state.leak_rate)
    allowed = drained.level + UNIT_COST <= state.capacity
    level = drained.level + UNIT_COST if allowed else drained.level

    updated = BucketState(level=level, last_update_time=drained.last_update_time)
    return AdmissionResult(allowed=allowed, state=state.with_bucket(identity, updated))


def inspect(state: LimiterState, identity: str) -> BucketState | None:
    """Return the stored bucket for ``identity`` without projecting any leak."""

    return state.buckets.get(identity)


def describe(state: LimiterState, identity: str) -> BucketInfo | None:
    """Return the stored bucket for ``identity`` alongside the limiter configuration.

    Examples
    --------
    >>> _, state = admit(create(3, 0.5), "u1", 10.0)
    >>> describe(state, "u1")
    BucketInfo(level=1.0, last_update_time=10.0, capacity=3, leak_rate=0.5)
    """

    bucket = inspect(state, identity)
    if bucket is None:
        return None
    return BucketInfo(
        level=bucket.level,
        last_update_time=bucket.last_update_time,
        capacity=state.capacity,
        leak_rate=state.leak_rate,
    )


__all__ = [
    "AdmissionResult",
    "LimiterState",
    "UNIT_COST",
    "admit",
    "create",
    "describe",
    "inspect",
]
