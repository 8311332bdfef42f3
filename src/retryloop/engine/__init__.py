# src/retryloop/engine/__init__.py
"""Retry engine: attempt loops driven by explicit interval schedules.

This module provides:
- RetryExecutor: Blocking attempt loop with tenacity
- AsyncRetryExecutor: Same loop for coroutine operations
- Clock / SystemClock / MockClock: Sleep abstraction for testability

Example:
    from retryloop.engine import RetryExecutor

    executor = RetryExecutor()
    executor.with_fixed_interval(1.0, 3, lambda attempt, limit: ping())
"""

from retryloop.engine.async_retry import (
    AsyncRetryExecutor,
    async_with_fixed_interval,
    async_with_interval_sequence,
)
from retryloop.engine.clock import DEFAULT_CLOCK, Clock, MockClock, SystemClock
from retryloop.engine.retry import (
    RetryExecutor,
    with_fixed_interval,
    with_interval_sequence,
)

__all__ = [
    "DEFAULT_CLOCK",
    "AsyncRetryExecutor",
    "Clock",
    "MockClock",
    "RetryExecutor",
    "SystemClock",
    "async_with_fixed_interval",
    "async_with_interval_sequence",
    "with_fixed_interval",
    "with_interval_sequence",
]
