# src/retryloop/engine/async_retry.py
"""AsyncRetryExecutor: RetryExecutor for coroutine operations.

Same contract as retryloop.engine.retry: ``limit = len(intervals) + 1``
attempts, first success returns, all failures raised as ErrorAggregate.
Waiting suspends the calling task instead of blocking the thread.

Cancelling the awaiting task is not contained. asyncio.CancelledError is a
BaseException, so it propagates out of the loop like KeyboardInterrupt does
in the synchronous executor.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
)

from retryloop.contracts import Duration, RetrySchedule
from retryloop.engine.retry import (
    OnRetry,
    accept_result,
    before_sleep_hook,
    exhausted,
    require_operation,
    wait_for_schedule,
)

T = TypeVar("T")

AsyncSleep = Callable[[float], Awaitable[None]]


class AsyncRetryExecutor:
    """Runs coroutine operations against explicit interval schedules.

    Example:
        executor = AsyncRetryExecutor()

        async def publish(attempt: int, limit: int) -> None:
            await broker.send(message)

        await executor.with_fixed_interval(0.25, 4, publish)
    """

    def __init__(self, sleep: AsyncSleep = asyncio.sleep, on_retry: OnRetry | None = None) -> None:
        """Initialize executor.

        Args:
            sleep: Coroutine function used for the waits between attempts.
            on_retry: Optional callback (attempt, limit, error), as for
                RetryExecutor.
        """
        self._sleep = sleep
        self._on_retry = on_retry

    async def with_interval_sequence(
        self,
        intervals: Iterable[Duration] | None,
        operation: Callable[[int, int], Awaitable[T | Exception]] | None,
    ) -> T:
        """Await ``operation`` up to ``len(intervals) + 1`` times."""
        require_operation(operation)
        return await self.run(RetrySchedule.of(intervals), operation)

    async def with_fixed_interval(
        self,
        interval: Duration,
        repeat_count: int,
        operation: Callable[[int, int], Awaitable[T | Exception]] | None,
    ) -> T:
        """Await ``operation`` up to ``repeat_count + 1`` times, ``interval`` apart."""
        require_operation(operation)
        return await self.run(RetrySchedule.fixed(interval, repeat_count), operation)

    async def run(
        self,
        schedule: RetrySchedule,
        operation: Callable[[int, int], Awaitable[T | Exception]] | None,
    ) -> T:
        require_operation(operation)
        assert operation is not None

        limit = schedule.limit
        failures: list[Exception] = []

        retrying = AsyncRetrying(
            stop=stop_after_attempt(limit),
            wait=wait_for_schedule(schedule),
            retry=retry_if_exception_type(Exception),
            sleep=self._sleep,
            before_sleep=before_sleep_hook(schedule, failures, self._on_retry),
            reraise=False,
        )

        try:
            async for attempt_state in retrying:
                with attempt_state:
                    attempt = attempt_state.retry_state.attempt_number - 1
                    try:
                        result = await operation(attempt, limit)
                    except Exception as exc:
                        failures.append(exc)
                        raise
                    return accept_result(result, attempt, limit, failures)

        except RetryError:
            raise exhausted(failures, limit) from None

        raise RuntimeError("Unexpected state in retry loop")  # pragma: no cover


async def async_with_interval_sequence(
    intervals: Iterable[Duration] | None,
    operation: Callable[[int, int], Awaitable[T | Exception]] | None,
    *,
    sleep: AsyncSleep = asyncio.sleep,
) -> T:
    return await AsyncRetryExecutor(sleep=sleep).with_interval_sequence(intervals, operation)


async def async_with_fixed_interval(
    interval: Duration,
    repeat_count: int,
    operation: Callable[[int, int], Awaitable[T | Exception]] | None,
    *,
    sleep: AsyncSleep = asyncio.sleep,
) -> T:
    return await AsyncRetryExecutor(sleep=sleep).with_fixed_interval(interval, repeat_count, operation)
