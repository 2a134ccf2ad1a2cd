"""Environment-driven configuration helpers.

Purpose
-------
Resolve the limiter configuration from keyword arguments, the process
environment, and optionally a nearby ``.env`` file.

Contents
--------
* :func:`parse_limit` / :func:`resolve_limit` - ``CAPACITY:LEAK_RATE`` parsing.
* :func:`enable_dotenv` / :func:`should_use_dotenv` - opt-in ``.env`` loading
  backed by :mod:`dotenv`.

System Role
-----------
Consumed by :mod:`lib_leaky_bucket.runtime` and :mod:`lib_leaky_bucket.cli`;
the domain layer never reads the environment itself.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from .domain import InvalidConfiguration

logger = logging.getLogger(__name__)

LIMIT_ENV_VAR = "LEAKY_BUCKET_LIMIT"
DOTENV_ENV_VAR = "LEAKY_BUCKET_USE_DOTENV"
DEFAULT_CAPACITY = 10
DEFAULT_LEAK_RATE = 1.0

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_LOADED: Path | None = None


def parse_limit(text: str) -> tuple[int, float]:
    """Parse ``CAPACITY:LEAK_RATE`` into a validated pair.

    Examples
    --------
    >>> parse_limit("5:0.5")
    (5, 0.5)
    >>> parse_limit("5")
    Traceback (most recent call last):
    ...
    lib_leaky_bucket.domain.errors.InvalidConfiguration: LEAKY_BUCKET_LIMIT must look like CAPACITY:LEAK_RATE (got '5')
    """

    capacity_text, sep, rate_text = text.strip().partition(":")
    if not sep or not capacity_text.strip() or not rate_text.strip():
        raise InvalidConfiguration(f"{LIMIT_ENV_VAR} must look like CAPACITY:LEAK_RATE (got {text!r})")
    try:
        capacity = int(capacity_text)
    except ValueError as exc:
        raise InvalidConfiguration(f"{LIMIT_ENV_VAR} capacity must be an integer (got {capacity_text!r})") from exc
    try:
        leak_rate = float(rate_text)
    except ValueError as exc:
        raise InvalidConfiguration(f"{LIMIT_ENV_VAR} leak rate must be a number (got {rate_text!r})") from exc
    if capacity <= 0 or leak_rate <= 0:
        raise InvalidConfiguration(f"{LIMIT_ENV_VAR} values must be positive (got {text!r})")
    return capacity, leak_rate


def resolve_limit(
    capacity: int | None = None,
    leak_rate: float | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> tuple[int, float]:
    """Return the effective ``(capacity, leak_rate)``.

    A non-empty :data:`LIMIT_ENV_VAR` overrides the arguments; arguments left
    as ``None`` fall back to :data:`DEFAULT_CAPACITY` and
    :data:`DEFAULT_LEAK_RATE`.
    """

    env = os.environ if environ is None else environ
    raw = env.get(LIMIT_ENV_VAR, "").strip()
    if raw:
        return parse_limit(raw)
    return (
        DEFAULT_CAPACITY if capacity is None else capacity,
        DEFAULT_LEAK_RATE if leak_rate is None else leak_rate,
    )


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is requested.

    An explicit CLI flag wins; otherwise :data:`DOTENV_ENV_VAR` is consulted.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    normalized = env_value.strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY or not normalized:
        return False
    logger.warning("Ignoring unrecognised %s value %r", DOTENV_ENV_VAR, env_value)
    return False


def _find_dotenv(start: Path) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate.resolve()
    return None


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` walking upwards from ``search_from`` (or the cwd).

    Variables already present in the environment keep precedence. The file is
    only loaded once per process; later calls return the cached path.
    """

    global _DOTENV_LOADED
    if _DOTENV_LOADED is not None:
        return _DOTENV_LOADED
    if search_from is None:
        found = find_dotenv(usecwd=True)
        path = Path(found).resolve() if found else None
    else:
        path = _find_dotenv(search_from.resolve())
    if path is None:
        logger.debug("No .env file found above %s", search_from or Path.cwd())
        return None
    load_dotenv(path, override=False)
    logger.debug("Loaded environment from %s", path)
    _DOTENV_LOADED = path
    return path


def _reset_dotenv_state_for_testing() -> None:
    """Forget which ``.env`` was loaded so tests can start from a clean slate."""

    global _DOTENV_LOADED
    _DOTENV_LOADED = None


__all__ = [
    "DEFAULT_CAPACITY",
    "DEFAULT_LEAK_RATE",
    "DOTENV_ENV_VAR",
    "LIMIT_ENV_VAR",
    "enable_dotenv",
    "parse_limit",
    "resolve_limit",
    "should_use_dotenv",
]
