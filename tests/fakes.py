from __future__ import annotations


class FakeClock:
    """Clock returning a scripted timestamp that tests advance by hand."""

    def __init__(self, start: float = 0.0) -> None:
        self.current = start

    def now(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds
