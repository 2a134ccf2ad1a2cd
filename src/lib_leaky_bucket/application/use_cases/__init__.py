"""Application use cases."""

from __future__ import annotations

from .admission import AdmitRequest, DiagnosticHook, create_admit_request

__all__ = ["AdmitRequest", "DiagnosticHook", "create_admit_request"]
