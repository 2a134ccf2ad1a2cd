"""Domain values and pure operations of the leaky-bucket limiter."""

from __future__ import annotations

from .bucket import BucketInfo, BucketState
from .decision import AdmissionDecision
from .errors import InvalidConfiguration
from .limiter import UNIT_COST, AdmissionResult, LimiterState, admit, create, describe, inspect

__all__ = [
    "AdmissionDecision",
    "AdmissionResult",
    "BucketInfo",
    "BucketState",
    "InvalidConfiguration",
    "LimiterState",
    "UNIT_COST",
    "admit",
    "create",
    "describe",
    "inspect",
]
