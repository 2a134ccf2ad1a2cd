from __future__ import annotations

from collections.abc import Callable
from io import StringIO
from typing import TypeVar

import pytest
from rich.console import Console

from lib_leaky_bucket.adapters import LockedLimiterStore, MonotonicClock, RichConsoleReporter, ShardedLimiterStore, SystemClock
from lib_leaky_bucket.application.ports import ClockPort, DecisionReporterPort, LimiterStorePort
from lib_leaky_bucket.domain import AdmissionDecision, LimiterState, create

T = TypeVar("T")


class _Recorder:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []

    def record(self, name: str, **payload) -> None:
        self.calls.append((name, payload))


class _FakeClock(ClockPort):
    def now(self) -> float:
        return 42.0


class _FakeReporter(DecisionReporterPort):
    def __init__(self, recorder: _Recorder) -> None:
        self.recorder = recorder

    def report(self, decision: AdmissionDecision) -> None:
        self.recorder.record("report", decision=decision)


class _FakeStore(LimiterStorePort):
    def __init__(self, recorder: _Recorder, state: LimiterState) -> None:
        self.recorder = recorder
        self.state = state

    def snapshot(self) -> LimiterState:
        return self.state

    def update(self, identity: str, fn: Callable[[LimiterState], tuple[T, LimiterState]]) -> T:
        self.recorder.record("update", identity=identity)
        value, self.state = fn(self.state)
        return value


@pytest.fixture
def recorder() -> _Recorder:
    return _Recorder()


def test_fakes_satisfy_protocols(recorder: _Recorder) -> None:
    clock = _FakeClock()
    reporter = _FakeReporter(recorder)
    store = _FakeStore(recorder, create(1, 1.0))

    assert isinstance(clock, ClockPort)
    assert isinstance(reporter, DecisionReporterPort)
    assert isinstance(store, LimiterStorePort)

    assert clock.now() == 42.0
    decision = AdmissionDecision("u", True, 1.0, 1.0, 1.0, 1)
    reporter.report(decision)
    assert store.update("u", lambda state: ("value", state)) == "value"
    assert recorder.calls == [("report", {"decision": decision}), ("update", {"identity": "u"})]


@pytest.mark.parametrize(
    "adapter, protocol",
    [
        (MonotonicClock(), ClockPort),
        (SystemClock(), ClockPort),
        (LockedLimiterStore(create(1, 1.0)), LimiterStorePort),
        (ShardedLimiterStore(create(1, 1.0)), LimiterStorePort),
        (RichConsoleReporter(console=Console(file=StringIO())), DecisionReporterPort),
    ],
)
def test_adapters_implement_ports(adapter: object, protocol: type) -> None:
    assert isinstance(adapter, protocol)
