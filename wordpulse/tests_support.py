"""Deterministic stand-ins for the random source, clock and sleeper (used by tests)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from .utils import GenerationError


class FixedRandomSource:
    """Return the same bytes every call (repeated/truncated to the requested size)."""

    def __init__(self, data: bytes) -> None:
        if not data:
            raise ValueError("data must be non-empty")
        self.data = data
        self.calls = 0

    def generate(self, n: int) -> bytes:
        self.calls += 1
        reps = n // len(self.data) + 1
        return (self.data * reps)[:n]


class FailingRandomSource:
    def __init__(self, message: str = "entropy source unavailable") -> None:
        self.message = message
        self.calls = 0

    def generate(self, n: int) -> bytes:
        self.calls += 1
        raise GenerationError(self.message)


class ManualClock:
    """Starts at a fixed instant; advanced by the sleeper it is paired with."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


class RecordingSleeper:
    def __init__(self, clock: ManualClock | None = None) -> None:
        self.clock = clock
        self.sleeps: list[float] = []

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if self.clock is not None:
            self.clock.advance(seconds)
