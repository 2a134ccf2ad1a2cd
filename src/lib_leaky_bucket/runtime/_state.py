"""Runtime state container and access helpers."""

from __future__ import annotations

from dataclasses import dataclass
from threading import RLock

from lib_leaky_bucket.adapters import RichConsoleReporter
from lib_leaky_bucket.application.ports import ClockPort, LimiterStorePort
from lib_leaky_bucket.application.use_cases import AdmitRequest, DiagnosticHook


@dataclass(slots=True)
class AdmissionRuntime:
    """Aggregate of live collaborators assembled by the composition root."""

    store: LimiterStorePort
    admit_request: AdmitRequest
    clock: ClockPort
    reporter: RichConsoleReporter | None
    diagnostic: DiagnosticHook
    capacity: int
    leak_rate: float
    sharded: bool


_STATE: AdmissionRuntime | None = None
_STATE_LOCK = RLock()


def set_runtime(runtime: AdmissionRuntime) -> None:
    """Install ``runtime`` as the active singleton."""

    with _STATE_LOCK:
        global _STATE
        _STATE = runtime


def clear_runtime() -> AdmissionRuntime | None:
    """Remove the active runtime if present and return it."""

    with _STATE_LOCK:
        global _STATE
        previous, _STATE = _STATE, None
        return previous


def current_runtime() -> AdmissionRuntime:
    """Return the active runtime or raise when uninitialised."""

    with _STATE_LOCK:
        if _STATE is None:
            raise RuntimeError("lib_leaky_bucket.runtime.init() must be called before checking admissions")
        return _STATE


def is_initialised() -> bool:
    """Return ``True`` when :func:`lib_leaky_bucket.runtime.init` has been called."""

    with _STATE_LOCK:
        return _STATE is not None


__all__ = [
    "AdmissionRuntime",
    "clear_runtime",
    "current_runtime",
    "is_initialised",
    "set_runtime",
]
