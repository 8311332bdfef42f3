# src/retryloop/engine/clock.py
"""Clock abstraction for testable waits between attempts.

Executors never call time.sleep() directly. They go through a Clock so tests
can run long schedules instantly and assert on the exact waits requested.

Production code uses SystemClock (the default).
Tests inject MockClock to record sleeps and advance time without blocking.
"""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    """Abstract clock used by RetryExecutor.

    Implementations:
    - SystemClock: time.monotonic() / time.sleep() (production)
    - MockClock: records sleeps and advances virtual time (testing)
    """

    def monotonic(self) -> float:
        """Return monotonic time in seconds."""
        ...

    def sleep(self, seconds: float) -> None:
        """Block the calling thread for ``seconds``.

        Zero is a valid duration and must return without delay.
        """
        ...


class SystemClock:
    """Production clock backed by the time module."""

    def monotonic(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class MockClock:
    """Controllable clock for deterministic testing.

    sleep() never blocks: it advances virtual time and records the request.

    Example:
        clock = MockClock()
        executor = RetryExecutor(clock=clock)

        with pytest.raises(ErrorAggregate):
            executor.with_fixed_interval(5.0, 3, always_fails)

        assert clock.sleeps == [5.0, 5.0, 5.0]
        assert clock.monotonic() == 15.0
    """

    def __init__(self, start: float = 0.0) -> None:
        """Initialize mock clock at a given time.

        Args:
            start: Initial monotonic time value (default 0.0).
        """
        self._current = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self._current

    def advance(self, seconds: float) -> None:
        """Advance mock time by specified seconds.

        Raises:
            ValueError: If seconds is negative.
        """
        if seconds < 0:
            raise ValueError(f"Cannot advance time by negative amount: {seconds}")
        self._current += seconds

    def sleep(self, seconds: float) -> None:
        self.advance(seconds)
        self.sleeps.append(float(seconds))

    async def async_sleep(self, seconds: float) -> None:
        """Coroutine form of sleep() for AsyncRetryExecutor."""
        self.sleep(seconds)


# Default clock for production use
DEFAULT_CLOCK: Clock = SystemClock()
