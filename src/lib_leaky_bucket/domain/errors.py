"""Domain errors raised while configuring a leaky-bucket limiter."""

from __future__ import annotations


class InvalidConfiguration(ValueError):
    """Raised when a limiter is configured with a non-positive capacity or leak rate.

    Subclasses :class:`ValueError` so callers validating startup settings can
    keep catching the builtin type.
    """


__all__ = ["InvalidConfiguration"]
