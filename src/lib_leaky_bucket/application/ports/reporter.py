"""Port for rendering admission decisions to humans."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_leaky_bucket.domain import AdmissionDecision


@runtime_checkable
class DecisionReporterPort(Protocol):
    """Present a single admission decision."""

    def report(self, decision: AdmissionDecision) -> None: ...


__all__ = ["DecisionReporterPort"]
