# src/retryloop/core/logging.py
"""Structured logging configuration for applications using retryloop.

The executors log through stdlib logging.getLogger(__name__) at DEBUG only,
with event fields passed in ``extra``; nothing is emitted unless the
embedding application enables it. The ExtraAdder step below lifts those
fields into structlog event keys. configure_logging() is a convenience
for applications (and tests) that want retryloop's events rendered.

Both structlog and stdlib records go through one processor chain via
ProcessorFormatter, so output is uniform whichever API a module logs with.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.stdlib import ProcessorFormatter

if TYPE_CHECKING:
    from retryloop.core.config import RetryLoopSettings

LIBRARY_LOGGER = "retryloop"


def _remove_internal_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Drop the bookkeeping keys ProcessorFormatter always adds."""
    del event_dict["_record"]
    del event_dict["_from_structlog"]
    return event_dict


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
) -> None:
    """Configure structlog and stdlib logging.

    Args:
        json_output: If True, output JSON. If False, human-readable.
        level: Log level (DEBUG, INFO, WARNING, ERROR). Set DEBUG to see
            per-attempt retry events.

    Raises:
        ValueError: If level is not a known logging level name.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        final_processors: list[Any] = [
            _remove_internal_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final_processors = [
            _remove_internal_fields,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    structlog.configure(
        processors=[*shared_processors, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure logging; cached loggers would keep the old chain
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=final_processors,
            # ExtraAdder surfaces the extra= fields of stdlib records
            foreign_pre_chain=[*shared_processors, structlog.stdlib.ExtraAdder()],
        )
    )

    root = logging.getLogger()
    root.handlers = []
    root.addHandler(handler)
    root.setLevel(log_level)
    logging.getLogger(LIBRARY_LOGGER).setLevel(log_level)


def configure_from_settings(settings: RetryLoopSettings) -> None:
    """Apply the log_level / log_json fields of loaded settings."""
    configure_logging(json_output=settings.log_json, level=settings.log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a bound logger for a module.

    Args:
        name: Logger name (typically __name__).
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
