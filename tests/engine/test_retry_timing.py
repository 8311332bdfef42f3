# tests/engine/test_retry_timing.py
"""Wall-clock timing of the attempt loop against the real SystemClock.

These tests sleep for real. Upper bounds leave room for scheduler slack on
loaded CI machines while still catching a trailing wait after the last
attempt (which would add a full interval).
"""

import time

import pytest

from retryloop.contracts import ErrorAggregate
from retryloop.engine.async_retry import async_with_interval_sequence
from retryloop.engine.retry import with_fixed_interval, with_interval_sequence

INTERVAL = 0.1
SLACK = 0.08


def fail_until_last(attempt: int, limit: int) -> Exception | None:
    if attempt != limit - 1:
        return ValueError(f"Error {attempt}")
    return None


@pytest.mark.slow
class TestRetryTiming:
    def test_waits_sum_of_intervals(self) -> None:
        start = time.monotonic()

        result = with_interval_sequence([INTERVAL] * 4, fail_until_last)

        elapsed = time.monotonic() - start
        assert result is None
        assert elapsed >= 4 * INTERVAL
        assert elapsed < 4 * INTERVAL + SLACK

    def test_no_wait_after_final_failure(self) -> None:
        start = time.monotonic()

        with pytest.raises(ErrorAggregate):
            with_fixed_interval(INTERVAL, 2, lambda attempt, limit: ValueError("down"))

        elapsed = time.monotonic() - start
        assert elapsed >= 2 * INTERVAL
        assert elapsed < 3 * INTERVAL

    def test_immediate_success_does_not_wait(self) -> None:
        start = time.monotonic()

        with_fixed_interval(1.0, 10, lambda attempt, limit: None)

        assert time.monotonic() - start < 0.5

    @pytest.mark.asyncio
    async def test_async_waits_sum_of_intervals(self) -> None:
        start = time.monotonic()

        async def operation(attempt: int, limit: int) -> Exception | None:
            return fail_until_last(attempt, limit)

        await async_with_interval_sequence([INTERVAL] * 4, operation)

        elapsed = time.monotonic() - start
        assert elapsed >= 4 * INTERVAL - 0.005  # asyncio may wake within clock resolution
        assert elapsed < 4 * INTERVAL + SLACK
