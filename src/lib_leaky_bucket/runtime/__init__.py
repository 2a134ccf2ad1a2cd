"""Runtime façade owning the process-wide limiter.

Purpose
-------
Give host applications a stable entry point (``init``, ``allow``, ``check``,
``bucket``, ``snapshot``, ``shutdown``) so they never thread
:class:`~lib_leaky_bucket.domain.LimiterState` values by hand.

Contents
--------
* ``init`` - composition root for store, clock, reporter, and hooks.
* ``allow`` / ``check`` - admission checks against the shared state.
* ``bucket`` / ``snapshot`` / ``inspect_runtime`` - read-only accessors.
* ``shutdown`` - drops the runtime so ``init`` may be called again.

System Role
-----------
Outer shell around the pure domain operations. Concurrent callers are
serialised by the store selected in ``init`` (one global lock, or one lock per
identity with ``sharded=True``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lib_leaky_bucket.application.ports import ClockPort
from lib_leaky_bucket.application.use_cases import DiagnosticHook
from lib_leaky_bucket.domain import AdmissionDecision, BucketInfo, LimiterState, describe

from ._composition import build_runtime
from ._settings import RuntimeSettings, build_runtime_settings
from ._state import AdmissionRuntime, clear_runtime, current_runtime, is_initialised, set_runtime

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Immutable view over the active runtime configuration."""

    capacity: int
    leak_rate: float
    sharded: bool
    console: bool
    tracked_identities: int


def init(
    *,
    capacity: int | None = None,
    leak_rate: float | None = None,
    sharded: bool = False,
    clock: ClockPort | None = None,
    console: bool = False,
    force_color: bool = False,
    no_color: bool = False,
    diagnostic_hook: DiagnosticHook = None,
) -> None:
    """Compose the admission runtime and install it as the active singleton.

    Inputs
    ------
    capacity, leak_rate:
        Limiter configuration. ``LEAKY_BUCKET_LIMIT`` (``CAPACITY:LEAK_RATE``)
        overrides both; omitted values fall back to the defaults in
        :mod:`lib_leaky_bucket.config`.
    sharded:
        Lock per identity instead of one lock for the whole state.
    clock:
        Timestamp source for checks that omit one; defaults to
        :class:`~lib_leaky_bucket.adapters.MonotonicClock`.
    console, force_color, no_color:
        Print every decision through Rich.
    diagnostic_hook:
        Callback receiving ``(event_name, payload)`` for every decision and
        runtime lifecycle step.

    Side Effects
    ------------
    Raises :class:`RuntimeError` when a runtime is already active and
    :class:`~lib_leaky_bucket.domain.InvalidConfiguration` for invalid limits.
    """

    if is_initialised():
        raise RuntimeError(
            "lib_leaky_bucket.runtime.init() cannot be called twice without shutdown(); call shutdown() first",
        )

    settings = build_runtime_settings(
        capacity=capacity,
        leak_rate=leak_rate,
        sharded=sharded,
        clock=clock,
        console=console,
        force_color=force_color,
        no_color=no_color,
        diagnostic_hook=diagnostic_hook,
    )
    runtime = build_runtime(settings)
    set_runtime(runtime)
    logger.debug("admission runtime initialised (capacity=%d, leak_rate=%g, sharded=%s)", settings.capacity, settings.leak_rate, settings.sharded)
    if diagnostic_hook is not None:
        diagnostic_hook(
            "runtime_initialised",
            {"capacity": settings.capacity, "leak_rate": settings.leak_rate, "sharded": settings.sharded},
        )


def check(identity: str, timestamp: float | None = None) -> AdmissionDecision:
    """Run an admission check for ``identity`` and return the full decision."""

    return current_runtime().admit_request(identity, timestamp)


def allow(identity: str, timestamp: float | None = None) -> bool:
    """Return ``True`` when ``identity`` may proceed at ``timestamp`` (or now)."""

    return check(identity, timestamp).allowed


def snapshot() -> LimiterState:
    """Return the currently published :class:`LimiterState`."""

    return current_runtime().store.snapshot()


def bucket(identity: str) -> BucketInfo | None:
    """Return the stored bucket for ``identity`` with the limiter configuration."""

    return describe(snapshot(), identity)


def inspect_runtime() -> RuntimeSnapshot:
    """Return a read-only summary of the active runtime."""

    runtime = current_runtime()
    return RuntimeSnapshot(
        capacity=runtime.capacity,
        leak_rate=runtime.leak_rate,
        sharded=runtime.sharded,
        console=runtime.reporter is not None,
        tracked_identities=len(runtime.store.snapshot().identities),
    )


def shutdown() -> None:
    """Discard the active runtime; a no-op when none is installed."""

    runtime = clear_runtime()
    if runtime is None:
        return
    logger.debug("admission runtime shut down")
    if runtime.diagnostic is not None:
        runtime.diagnostic("runtime_shutdown", {"tracked_identities": len(runtime.store.snapshot().identities)})


__all__ = [
    "AdmissionRuntime",
    "RuntimeSettings",
    "RuntimeSnapshot",
    "allow",
    "bucket",
    "check",
    "init",
    "inspect_runtime",
    "is_initialised",
    "shutdown",
    "snapshot",
]
