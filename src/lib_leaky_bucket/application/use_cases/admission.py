"""Use case turning a store, clock, and reporter into an admission callable.

Purpose
-------
Bridge the pure :func:`lib_leaky_bucket.domain.admit` transition with the
collaborators a running service needs: a clock when callers omit timestamps,
a store that serialises concurrent updates, and optional reporting hooks.

Contents
--------
* :func:`create_admit_request` factory returning the per-request callable.

System Role
-----------
Application-layer orchestrator invoked by :mod:`lib_leaky_bucket.runtime` and
the ``replay`` CLI command.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from lib_leaky_bucket.application.ports import ClockPort, DecisionReporterPort, LimiterStorePort
from lib_leaky_bucket.domain import AdmissionDecision, LimiterState, admit

logger = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, Mapping[str, Any]], None] | None
AdmitRequest = Callable[..., AdmissionDecision]


def create_admit_request(
    *,
    store: LimiterStorePort,
    clock: ClockPort,
    reporter: DecisionReporterPort | None = None,
    diagnostic: DiagnosticHook = None,
) -> AdmitRequest:
    """Build the admission callable bound to the given collaborators.

    Parameters
    ----------
    store:
        Adapter owning the authoritative :class:`LimiterState`.
    clock:
        Source of timestamps for requests that do not supply one.
    reporter:
        Optional human-facing sink receiving every decision.
    diagnostic:
        Optional callback invoked with ``"admitted"`` or ``"denied"`` and the
        decision payload.

    Returns
    -------
    Callable[[str, float | None], AdmissionDecision]
        Function accepting ``identity`` and an optional ``timestamp``.

    Examples
    --------
    >>> from lib_leaky_bucket.adapters import LockedLimiterStore
    >>> from lib_leaky_bucket.domain import create
    >>> class FixedClock:
    ...     def now(self) -> float:
    ...         return 0.0
    >>> admit_request = create_admit_request(store=LockedLimiterStore(create(1, 1.0)), clock=FixedClock())
    >>> admit_request("u1").allowed
    True
    >>> admit_request("u1").allowed
    False
    """

    def _decide(identity: str, timestamp: float) -> Callable[[LimiterState], tuple[AdmissionDecision, LimiterState]]:
        def transition(state: LimiterState) -> tuple[AdmissionDecision, LimiterState]:
            allowed, new_state = admit(state, identity, timestamp)
            bucket = new_state.buckets[identity]
            decision = AdmissionDecision(
                identity=identity,
                allowed=allowed,
                requested_at=float(timestamp),
                effective_time=bucket.last_update_time,
                level=bucket.level,
                capacity=new_state.capacity,
            )
            return decision, new_state

        return transition

    def admit_request(identity: str, timestamp: float | None = None) -> AdmissionDecision:
        """Check ``identity`` at ``timestamp`` (or now) and publish the new state."""

        at = clock.now() if timestamp is None else timestamp
        decision = store.update(identity, _decide(identity, at))

        if decision.allowed:
            logger.debug("admitted %s at %.3f (level %.3f/%d)", identity, at, decision.level, decision.capacity)
        else:
            logger.info("denied %s at %.3f (level %.3f/%d)", identity, at, decision.level, decision.capacity)
        if decision.clamped:
            logger.debug("clamped out-of-order timestamp for %s: %.3f -> %.3f", identity, at, decision.effective_time)

        if reporter is not None:
            reporter.report(decision)
        if diagnostic is not None:
            diagnostic("admitted" if decision.allowed else "denied", decision.to_dict())
        return decision

    return admit_request


__all__ = ["AdmitRequest", "DiagnosticHook", "create_admit_request"]
