"""Resolved runtime settings."""

from __future__ import annotations

from dataclasses import dataclass

from lib_leaky_bucket.application.ports import ClockPort
from lib_leaky_bucket.application.use_cases import DiagnosticHook
from lib_leaky_bucket.config import resolve_limit


@dataclass(slots=True, frozen=True)
class RuntimeSettings:
    """Inputs for :func:`build_runtime` after environment overrides were applied."""

    capacity: int
    leak_rate: float
    sharded: bool = False
    clock: ClockPort | None = None
    console: bool = False
    force_color: bool = False
    no_color: bool = False
    diagnostic_hook: DiagnosticHook = None


def build_runtime_settings(
    *,
    capacity: int | None,
    leak_rate: float | None,
    sharded: bool,
    clock: ClockPort | None,
    console: bool,
    force_color: bool,
    no_color: bool,
    diagnostic_hook: DiagnosticHook,
) -> RuntimeSettings:
    """Merge keyword arguments with ``LEAKY_BUCKET_LIMIT`` and defaults."""

    resolved_capacity, resolved_rate = resolve_limit(capacity, leak_rate)
    return RuntimeSettings(
        capacity=resolved_capacity,
        leak_rate=resolved_rate,
        sharded=sharded,
        clock=clock,
        console=console,
        force_color=force_color,
        no_color=no_color,
        diagnostic_hook=diagnostic_hook,
    )


__all__ = ["RuntimeSettings", "build_runtime_settings"]
