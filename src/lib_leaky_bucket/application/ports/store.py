"""Port for publishing limiter state between concurrent callers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeVar, runtime_checkable

from lib_leaky_bucket.domain import LimiterState

T = TypeVar("T")


@runtime_checkable
class LimiterStorePort(Protocol):
    """Own the authoritative :class:`LimiterState` and serialise updates per identity."""

    def snapshot(self) -> LimiterState:
        """Return the currently published state."""

    def update(self, identity: str, fn: Callable[[LimiterState], tuple[T, LimiterState]]) -> T:
        """Run ``fn`` while holding the lock covering ``identity`` and publish its state.

        ``fn`` receives the current state and returns ``(value, new_state)``;
        ``value`` is handed back to the caller.
        """


__all__ = ["LimiterStorePort"]
