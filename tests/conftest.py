# tests/conftest.py
"""Shared test fixtures and helpers.

Operation factories:
- succeed: returns None on every attempt
- fail_with(message): returns ValueError(message) on every attempt
- raise_with(message): raises RuntimeError(message) on every attempt
- RecordingOperation: records (attempt, limit) calls, fails until a chosen attempt

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest
from hypothesis import HealthCheck, Verbosity, settings

from retryloop.engine.clock import MockClock

settings.register_profile("ci", max_examples=100, suppress_health_check=[HealthCheck.too_slow])
settings.register_profile("nightly", max_examples=1000, suppress_health_check=[HealthCheck.too_slow])
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose)
settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "ci"))


class RecordingOperation:
    """Operation that records every call and succeeds from ``succeed_on``.

    Args:
        succeed_on: Zero-based attempt that returns ``result``. None means
            every attempt fails.
        result: Value returned on success.
        raises: If True, failures are raised instead of returned.
    """

    def __init__(self, succeed_on: int | None = None, result: object = None, raises: bool = False) -> None:
        self.succeed_on = succeed_on
        self.result = result
        self.raises = raises
        self.calls: list[tuple[int, int]] = []

    def __call__(self, attempt: int, limit: int) -> object:
        self.calls.append((attempt, limit))
        if self.succeed_on is not None and attempt >= self.succeed_on:
            return self.result
        error = ValueError(f"Error {attempt}")
        if self.raises:
            raise error
        return error

    @property
    def attempts(self) -> list[int]:
        return [attempt for attempt, _ in self.calls]


def succeed(attempt: int, limit: int) -> None:
    return None


def fail_with(message: str) -> Callable[[int, int], Exception]:
    def operation(attempt: int, limit: int) -> Exception:
        return ValueError(message)

    return operation


def raise_with(message: str) -> Callable[[int, int], None]:
    def operation(attempt: int, limit: int) -> None:
        raise RuntimeError(message)

    return operation


@pytest.fixture
def mock_clock() -> MockClock:
    return MockClock()
