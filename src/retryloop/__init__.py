"""
retryloop: Run an operation until it succeeds, waiting an explicit interval
between attempts.

The operation runs ``len(intervals) + 1`` times at most: the intervals are the
waits between attempts, and there is no wait after the last one. An empty
interval sequence runs the operation once.

If any attempt succeeds its result is returned at once. If every attempt fails,
all failures are raised together as an ErrorAggregate (an ExceptionGroup),
in the order the attempts ran.

Example:
    from retryloop import ErrorAggregate, with_interval_sequence

    def connect(attempt: int, limit: int) -> Connection:
        return pool.connect()

    try:
        conn = with_interval_sequence([0.1, 0.5, 1.0], connect)
    except ErrorAggregate as exc:
        log.error("could not connect", failures=len(exc.errors))
"""

from retryloop.contracts import (
    Duration,
    ErrorAggregate,
    InvalidOperationError,
    InvalidScheduleError,
    NilOperationError,
    RetryLoopError,
    RetrySchedule,
)
from retryloop.engine import (
    AsyncRetryExecutor,
    RetryExecutor,
    async_with_fixed_interval,
    async_with_interval_sequence,
    with_fixed_interval,
    with_interval_sequence,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncRetryExecutor",
    "Duration",
    "ErrorAggregate",
    "InvalidOperationError",
    "InvalidScheduleError",
    "NilOperationError",
    "RetryExecutor",
    "RetryLoopError",
    "RetrySchedule",
    "async_with_fixed_interval",
    "async_with_interval_sequence",
    "with_fixed_interval",
    "with_interval_sequence",
]
