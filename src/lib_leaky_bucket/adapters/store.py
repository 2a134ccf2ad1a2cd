"""Lock-guarded stores publishing :class:`LimiterState` across threads.

Purpose
-------
Serialise the "read state, compute new state, publish" cycle so two
concurrent checks for the same identity can never both see a stale level.

Contents
--------
* :class:`LockedLimiterStore` - one lock around the whole state reference.
* :class:`ShardedLimiterStore` - one lock per identity; unrelated identities
  never contend.

System Role
-----------
Concrete :class:`~lib_leaky_bucket.application.ports.LimiterStorePort`
implementations selected by :func:`lib_leaky_bucket.runtime.init`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from threading import Lock, RLock
from typing import TypeVar

from lib_leaky_bucket.application.ports.store import LimiterStorePort
from lib_leaky_bucket.domain import LimiterState

T = TypeVar("T")


class LockedLimiterStore(LimiterStorePort):
    """Guard a single :class:`LimiterState` reference with one re-entrant lock."""

    def __init__(self, initial: LimiterState) -> None:
        self._state = initial
        self._lock = RLock()

    def snapshot(self) -> LimiterState:
        """Return the most recently published state."""
        with self._lock:
            return self._state

    def update(self, identity: str, fn: Callable[[LimiterState], tuple[T, LimiterState]]) -> T:
        """Apply ``fn`` to the current state and publish the result atomically."""
        with self._lock:
            value, new_state = fn(self._state)
            self._state = new_state
        return value


@dataclass(slots=True)
class _Shard:
    state: LimiterState
    lock: Lock = field(default_factory=Lock)


class ShardedLimiterStore(LimiterStorePort):
    """Keep one independently locked lineage per identity.

    Each shard holds a :class:`LimiterState` containing only its own identity;
    :meth:`snapshot` merges them into a single value on demand.
    """

    def __init__(self, initial: LimiterState) -> None:
        self._empty = LimiterState(capacity=initial.capacity, leak_rate=initial.leak_rate)
        self._guard = Lock()
        self._shards: dict[str, _Shard] = {
            identity: _Shard(self._empty.with_bucket(identity, bucket)) for identity, bucket in initial.buckets.items()
        }

    def _shard(self, identity: str) -> _Shard:
        with self._guard:
            shard = self._shards.get(identity)
            if shard is None:
                shard = _Shard(self._empty)
                self._shards[identity] = shard
            return shard

    def snapshot(self) -> LimiterState:
        """Return a merged view of every shard's latest bucket."""
        with self._guard:
            shards = list(self._shards.items())
        merged = {}
        for identity, shard in shards:
            with shard.lock:
                bucket = shard.state.buckets.get(identity)
            if bucket is not None:
                merged[identity] = bucket
        return LimiterState(capacity=self._empty.capacity, leak_rate=self._empty.leak_rate, buckets=merged)

    def update(self, identity: str, fn: Callable[[LimiterState], tuple[T, LimiterState]]) -> T:
        """Apply ``fn`` to ``identity``'s shard while holding only that shard's lock."""
        shard = self._shard(identity)
        with shard.lock:
            value, new_state = fn(shard.state)
            bucket = new_state.buckets.get(identity)
            shard.state = self._empty if bucket is None else self._empty.with_bucket(identity, bucket)
        return value


__all__ = ["LockedLimiterStore", "ShardedLimiterStore"]
