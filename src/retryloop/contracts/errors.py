# src/retryloop/contracts/errors.py
"""Error types raised by the retry executors.

Two kinds of error ever leave an executor:

- Configuration errors (InvalidOperationError, NilOperationError,
  InvalidScheduleError) are raised before the first attempt and are never
  retried.
- ErrorAggregate is raised when every attempt failed. It carries one entry
  per failed attempt, in the order the attempts ran.

Everything an attempt returns or raises is recorded inside the loop and only
surfaces through the aggregate.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Self


class RetryLoopError(Exception):
    """Base class for retryloop configuration errors."""


class InvalidOperationError(RetryLoopError, TypeError):
    """Raised when the operation handed to an executor is not callable."""


class NilOperationError(InvalidOperationError):
    """Raised when an executor is given None instead of an operation."""

    def __init__(self) -> None:
        super().__init__("operation can not be None")

    def __reduce__(self) -> tuple[type[NilOperationError], tuple[()], dict[str, object]]:
        return type(self), (), self.__dict__


class InvalidScheduleError(RetryLoopError, ValueError):
    """Raised when an interval or repeat count cannot form a retry schedule."""


class ErrorAggregate(ExceptionGroup):
    """All failures of an exhausted retry invocation, in attempt order.

    Subclasses ExceptionGroup so callers can use ``except*`` against the
    member types. ``derive()`` keeps the type for split() and subgroup().

    Example:
        try:
            with_fixed_interval(0.5, 2, fetch)
        except ErrorAggregate as exc:
            first, *rest = exc.errors
    """

    def __new__(cls, errors: Sequence[Exception]) -> Self:
        failures = list(errors)
        return super().__new__(cls, _summarize(failures), failures)

    def __init__(self, errors: Sequence[Exception]) -> None:
        failures = list(errors)
        super().__init__(_summarize(failures), failures)

    def __reduce__(self) -> tuple[type[ErrorAggregate], tuple[list[Exception]], dict[str, object]]:
        # BaseException.__reduce__ would call cls(message, exceptions)
        return type(self), (list(self.exceptions),), self.__dict__

    def derive(self, excs: Sequence[Exception]) -> ErrorAggregate:  # type: ignore[override]
        return ErrorAggregate(excs)

    @property
    def errors(self) -> tuple[Exception, ...]:
        """Failures in the order the attempts produced them."""
        return self.exceptions

    def __len__(self) -> int:
        return len(self.exceptions)


def _summarize(errors: Sequence[Exception]) -> str:
    count = len(errors)
    return f"all {count} attempt{'s' if count != 1 else ''} failed"
