# src/retryloop/engine/retry.py
"""RetryExecutor: run an operation until it succeeds or its schedule runs out.

The operation is called as ``operation(attempt, limit)`` where ``attempt`` is
zero-based and ``limit`` is the total number of attempts (schedule length
plus one). An attempt fails when the operation either returns an Exception
instance or raises one. Anything else it returns is success and is handed
back to the caller unchanged.

How many times does the operation run?
    At most ``len(intervals) + 1``. The intervals are the waits *between*
    attempts, and there is no wait after the last one. Pass an empty
    sequence to run the operation exactly once.

Attempt loop:
    tenacity drives the loop. stop_after_attempt(limit) ends it, and the wait
    strategy reads the interval for the attempt that just failed from the
    schedule by index. The first success returns immediately, so remaining
    intervals are never slept. When every attempt fails the collected
    failures are raised together as ErrorAggregate.

Fault containment:
    An Exception raised by the operation is recorded as that attempt's
    failure, exactly like a returned one. BaseExceptions that are not
    Exceptions (KeyboardInterrupt, SystemExit) are not failures; they
    propagate unchanged and abort the loop.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from tenacity import (
    RetryCallState,
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
)

from retryloop.contracts import Duration, ErrorAggregate, InvalidOperationError, NilOperationError, RetrySchedule
from retryloop.engine.clock import DEFAULT_CLOCK, Clock

logger = logging.getLogger(__name__)

T = TypeVar("T")

OnRetry = Callable[[int, int, Exception], None]


class ReturnedFailure(Exception):
    """Carries an Exception the operation returned through tenacity.

    Raised inside the attempt so tenacity sees a failed outcome. The original
    error, not this wrapper, is what ends up in ErrorAggregate.
    """

    def __init__(self, error: Exception) -> None:
        self.error = error
        super().__init__(error)


def wait_for_schedule(schedule: RetrySchedule) -> Callable[[RetryCallState], float]:
    """Build a tenacity wait strategy that consumes ``schedule`` front to back."""

    def wait(retry_state: RetryCallState) -> float:
        # attempt_number is 1-based and names the attempt that just failed
        return schedule.interval_after(retry_state.attempt_number - 1)

    return wait


def require_operation(operation: object) -> None:
    """Reject a missing or non-callable operation before any attempt runs.

    Raises:
        NilOperationError: If operation is None.
        InvalidOperationError: If operation is not callable.
    """
    if operation is None:
        raise NilOperationError()
    if not callable(operation):
        raise InvalidOperationError(f"operation must be callable, got {type(operation).__name__}")


def before_sleep_hook(
    schedule: RetrySchedule,
    failures: list[Exception],
    on_retry: OnRetry | None,
) -> Callable[[RetryCallState], None]:
    """Build the tenacity before_sleep callback for one invocation.

    Runs only when another attempt follows, so the final failure is never
    reported here.
    """

    def before_sleep(retry_state: RetryCallState) -> None:
        attempt = retry_state.attempt_number - 1
        error = failures[-1]
        logger.debug(
            "retry_attempt_failed",
            extra={
                "attempt": attempt,
                "limit": schedule.limit,
                "error_type": type(error).__name__,
                "wait_seconds": schedule.interval_after(attempt),
            },
        )
        if on_retry is not None:
            on_retry(attempt, schedule.limit, error)

    return before_sleep


def accept_result(result: T | Exception, attempt: int, limit: int, failures: list[Exception]) -> T:
    """Pass a success through, or record a returned Exception and fail the attempt.

    Raises:
        ReturnedFailure: If result is an Exception instance.
    """
    if isinstance(result, Exception):
        failures.append(result)
        raise ReturnedFailure(result)
    if attempt > 0:
        logger.debug("retry_succeeded", extra={"attempt": attempt, "limit": limit})
    return result


def exhausted(failures: list[Exception], limit: int) -> ErrorAggregate:
    """Aggregate for a schedule that ran out with every attempt failed."""
    logger.debug("retry_exhausted", extra={"attempts": len(failures), "limit": limit})
    return ErrorAggregate(failures)


class RetryExecutor:
    """Runs operations against explicit interval schedules.

    Executors hold no per-call state, so one instance can be shared between
    threads. Each call builds its own schedule copy and failure list.

    Example:
        executor = RetryExecutor()

        def fetch(attempt: int, limit: int) -> bytes | Exception:
            try:
                return client.get(url)
            except TimeoutError as exc:
                return exc

        body = executor.with_interval_sequence([0.1, 0.5, 2.0], fetch)
    """

    def __init__(self, clock: Clock = DEFAULT_CLOCK, on_retry: OnRetry | None = None) -> None:
        """Initialize executor.

        Args:
            clock: Supplies sleep() for the waits between attempts.
            on_retry: Optional callback (attempt, limit, error) invoked after a
                failed attempt that will be retried. Not called for the
                final failure. Exceptions it raises propagate.
        """
        self._clock = clock
        self._on_retry = on_retry

    def with_interval_sequence(
        self,
        intervals: Iterable[Duration] | None,
        operation: Callable[[int, int], T | Exception] | None,
    ) -> T:
        """Run ``operation`` up to ``len(intervals) + 1`` times.

        ``intervals`` is copied before use; the caller's sequence is never
        modified.

        Raises:
            NilOperationError: If operation is None (zero attempts made).
            InvalidOperationError: If operation is not callable.
            InvalidScheduleError: If an interval is negative or not a duration.
            ErrorAggregate: If every attempt failed.
        """
        require_operation(operation)
        return self.run(RetrySchedule.of(intervals), operation)

    def with_fixed_interval(
        self,
        interval: Duration,
        repeat_count: int,
        operation: Callable[[int, int], T | Exception] | None,
    ) -> T:
        """Run ``operation`` up to ``repeat_count + 1`` times, ``interval`` apart.

        Same as with_interval_sequence([interval] * repeat_count, operation).
        """
        require_operation(operation)
        return self.run(RetrySchedule.fixed(interval, repeat_count), operation)

    def run(
        self,
        schedule: RetrySchedule,
        operation: Callable[[int, int], T | Exception] | None,
    ) -> T:
        """Attempt loop shared by both entry points."""
        require_operation(operation)
        assert operation is not None

        limit = schedule.limit
        failures: list[Exception] = []

        retrying = Retrying(
            stop=stop_after_attempt(limit),
            wait=wait_for_schedule(schedule),
            retry=retry_if_exception_type(Exception),
            sleep=self._clock.sleep,
            before_sleep=before_sleep_hook(schedule, failures, self._on_retry),
            reraise=False,  # RetryError is converted to ErrorAggregate below
        )

        try:
            for attempt_state in retrying:
                with attempt_state:
                    attempt = attempt_state.retry_state.attempt_number - 1
                    try:
                        result = operation(attempt, limit)
                    except Exception as exc:
                        failures.append(exc)
                        raise
                    return accept_result(result, attempt, limit, failures)

        except RetryError:
            raise exhausted(failures, limit) from None

        # Retrying always returns or raises
        raise RuntimeError("Unexpected state in retry loop")  # pragma: no cover


def with_interval_sequence(
    intervals: Iterable[Duration] | None,
    operation: Callable[[int, int], T | Exception] | None,
    *,
    clock: Clock = DEFAULT_CLOCK,
) -> T:
    """Module-level shortcut for RetryExecutor(clock).with_interval_sequence()."""
    return RetryExecutor(clock=clock).with_interval_sequence(intervals, operation)


def with_fixed_interval(
    interval: Duration,
    repeat_count: int,
    operation: Callable[[int, int], T | Exception] | None,
    *,
    clock: Clock = DEFAULT_CLOCK,
) -> T:
    """Module-level shortcut for RetryExecutor(clock).with_fixed_interval()."""
    return RetryExecutor(clock=clock).with_fixed_interval(interval, repeat_count, operation)
