from __future__ import annotations

from collections.abc import Iterator

import pytest

from lib_leaky_bucket import config as leaky_config
from lib_leaky_bucket import runtime

from tests.fakes import FakeClock


@pytest.fixture(autouse=True)
def _reset_runtime(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start every test without an active runtime or a stray limit override."""

    monkeypatch.delenv(leaky_config.LIMIT_ENV_VAR, raising=False)
    monkeypatch.delenv(leaky_config.DOTENV_ENV_VAR, raising=False)
    runtime.shutdown()
    yield
    runtime.shutdown()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
