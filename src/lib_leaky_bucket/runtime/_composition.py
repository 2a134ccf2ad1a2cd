"""Runtime composition wiring domain, use case, and adapters.

Translates :class:`RuntimeSettings` into the live :class:`AdmissionRuntime`
singleton. Adapter choices live here so the façade in
:mod:`lib_leaky_bucket.runtime` stays a thin accessor layer.
"""

from __future__ import annotations

from lib_leaky_bucket.adapters import LockedLimiterStore, MonotonicClock, RichConsoleReporter, ShardedLimiterStore
from lib_leaky_bucket.application.ports import ClockPort, LimiterStorePort
from lib_leaky_bucket.application.use_cases import create_admit_request
from lib_leaky_bucket.domain import create

from ._settings import RuntimeSettings
from ._state import AdmissionRuntime


def create_store(settings: RuntimeSettings) -> LimiterStorePort:
    """Return the store matching the requested locking strategy."""

    initial = create(settings.capacity, settings.leak_rate)
    if settings.sharded:
        return ShardedLimiterStore(initial)
    return LockedLimiterStore(initial)


def create_reporter(settings: RuntimeSettings) -> RichConsoleReporter | None:
    if not settings.console:
        return None
    return RichConsoleReporter(force_color=settings.force_color, no_color=settings.no_color)


def build_runtime(settings: RuntimeSettings) -> AdmissionRuntime:
    """Assemble the admission runtime from resolved settings."""

    store = create_store(settings)
    clock: ClockPort = settings.clock or MonotonicClock()
    reporter = create_reporter(settings)
    admit_request = create_admit_request(
        store=store,
        clock=clock,
        reporter=reporter,
        diagnostic=settings.diagnostic_hook,
    )
    return AdmissionRuntime(
        store=store,
        admit_request=admit_request,
        clock=clock,
        reporter=reporter,
        diagnostic=settings.diagnostic_hook,
        capacity=settings.capacity,
        leak_rate=settings.leak_rate,
        sharded=settings.sharded,
    )


__all__ = ["build_runtime", "create_reporter", "create_store"]
