# src/retryloop/core/__init__.py
"""Core infrastructure: configuration loading and logging setup."""

from retryloop.core.config import RetryLoopSettings, ScheduleSettings, load_settings
from retryloop.core.logging import configure_from_settings, configure_logging, get_logger

__all__ = [
    "RetryLoopSettings",
    "ScheduleSettings",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    "load_settings",
]
