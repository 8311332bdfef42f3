# src/retryloop/contracts/schedule.py
"""RetrySchedule: the ordered waits between attempts.

A schedule of N intervals produces N + 1 attempts, because no wait follows
the final attempt. An empty schedule means a single attempt and no waiting.

Schedules are frozen and hold their own tuple copy of the intervals, so the
sequence a caller passes in is never mutated or aliased by an executor.
"""

from __future__ import annotations

import math
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from retryloop.contracts.errors import InvalidScheduleError

if TYPE_CHECKING:
    from retryloop.core.config import ScheduleSettings

Duration = float | int | timedelta


def to_seconds(duration: Duration) -> float:
    """Normalize a duration to non-negative float seconds.

    Raises:
        InvalidScheduleError: If the value is negative, not finite, longer than
            the platform can sleep (threading.TIMEOUT_MAX), or not a number or
            timedelta (bool is rejected even though it is an int).
    """
    if isinstance(duration, timedelta):
        seconds = duration.total_seconds()
    elif isinstance(duration, (int, float)) and not isinstance(duration, bool):
        try:
            seconds = float(duration)
        except OverflowError:
            raise InvalidScheduleError("interval is too large to sleep for") from None
    else:
        raise InvalidScheduleError(f"interval must be seconds or a timedelta, got {type(duration).__name__}")

    if not math.isfinite(seconds):
        raise InvalidScheduleError(f"interval must be finite, got {seconds}")
    if seconds < 0:
        raise InvalidScheduleError(f"interval must be >= 0, got {seconds}")
    if seconds > threading.TIMEOUT_MAX:
        raise InvalidScheduleError(f"interval must be <= {threading.TIMEOUT_MAX}, got {seconds}")
    return seconds


@dataclass(frozen=True, slots=True)
class RetrySchedule:
    """Immutable sequence of waits, consumed front to back.

    Attributes:
        intervals: Seconds to wait after attempt ``i`` before attempt ``i + 1``.
    """

    intervals: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable of durations; always store a normalized tuple
        object.__setattr__(self, "intervals", tuple(to_seconds(d) for d in self.intervals))

    @classmethod
    def of(cls, intervals: Iterable[Duration] | None) -> RetrySchedule:
        """Copy a caller-supplied sequence into a schedule. None means empty."""
        if intervals is None:
            return cls()
        if isinstance(intervals, RetrySchedule):
            return intervals
        return cls(tuple(intervals))  # type: ignore[arg-type]

    @classmethod
    def fixed(cls, interval: Duration, repeat_count: int) -> RetrySchedule:
        """Schedule of ``repeat_count`` copies of ``interval``.

        Raises:
            InvalidScheduleError: If repeat_count is negative or not an int.
        """
        if isinstance(repeat_count, bool) or not isinstance(repeat_count, int):
            raise InvalidScheduleError(f"repeat_count must be an int, got {type(repeat_count).__name__}")
        if repeat_count < 0:
            raise InvalidScheduleError(f"repeat_count must be >= 0, got {repeat_count}")
        return cls((to_seconds(interval),) * repeat_count)

    @classmethod
    def from_settings(cls, settings: ScheduleSettings) -> RetrySchedule:
        """Factory from a validated ScheduleSettings model."""
        if settings.intervals is not None:
            return cls(tuple(settings.intervals))
        # model validation guarantees interval and repeat are set together
        assert settings.interval is not None and settings.repeat is not None
        return cls.fixed(settings.interval, settings.repeat)

    @property
    def limit(self) -> int:
        """Total number of attempts this schedule allows."""
        return len(self.intervals) + 1

    @property
    def total_delay(self) -> float:
        """Seconds spent waiting if every attempt fails."""
        return math.fsum(self.intervals)

    def interval_after(self, attempt: int) -> float:
        """Wait that follows zero-based ``attempt``; 0.0 past the last slot."""
        if 0 <= attempt < len(self.intervals):
            return self.intervals[attempt]
        return 0.0
