# src/retryloop/contracts/__init__.py
"""Shared contracts: schedules and the errors executors raise.

This package is a leaf: it imports nothing from retryloop.engine or
retryloop.core at runtime.
"""

from retryloop.contracts.errors import (
    ErrorAggregate,
    InvalidOperationError,
    InvalidScheduleError,
    NilOperationError,
    RetryLoopError,
)
from retryloop.contracts.schedule import Duration, RetrySchedule, to_seconds

__all__ = [
    # errors
    "ErrorAggregate",
    "InvalidOperationError",
    "InvalidScheduleError",
    "NilOperationError",
    "RetryLoopError",
    # schedule
    "Duration",
    "RetrySchedule",
    "to_seconds",
]
