"""Public package surface of the leaky-bucket admission limiter.

The pure operations (:func:`create`, :func:`admit`, :func:`inspect`,
:func:`describe`) and their value types are re-exported here so callers can
thread :class:`LimiterState` values without touching the inner layers. The
lock-guarded, process-wide variant lives in :mod:`lib_leaky_bucket.runtime`.
"""

from __future__ import annotations

from .domain import (
    AdmissionDecision,
    AdmissionResult,
    BucketInfo,
    BucketState,
    InvalidConfiguration,
    LimiterState,
    admit,
    create,
    describe,
    inspect,
)


def summary_info() -> str:
    """Return the metadata banner used by the CLI entry point.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """
    from . import __init__conf__

    lines: list[str] = []
    __init__conf__.print_info(writer=lines.append)
    return "".join(lines)


__all__ = [
    "AdmissionDecision",
    "AdmissionResult",
    "BucketInfo",
    "BucketState",
    "InvalidConfiguration",
    "LimiterState",
    "admit",
    "create",
    "describe",
    "inspect",
    "summary_info",
]
