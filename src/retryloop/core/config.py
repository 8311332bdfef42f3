# src/retryloop/core/config.py
"""Configuration schema for named retry schedules.

Applications keep their retry schedules in YAML instead of hard-coding
interval lists:

    log_level: INFO
    schedules:
      http:
        intervals: [0.1, 0.5, 2.0]
      poll:
        interval: 5
        repeat: 12

load_settings() reads the file through Dynaconf (RETRYLOOP_* environment
variables override file values) and validates it with Pydantic.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from retryloop.contracts.schedule import RetrySchedule


class ScheduleSettings(BaseModel):
    """One retry schedule.

    Exactly one form must be given: an explicit ``intervals`` list, or an
    ``interval`` repeated ``repeat`` times.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    intervals: list[float] | None = Field(default=None, description="Seconds to wait between attempts")
    interval: float | None = Field(default=None, ge=0, allow_inf_nan=False, description="Fixed wait in seconds")
    repeat: int | None = Field(default=None, ge=0, description="Number of waits (attempts minus one)")

    @field_validator("intervals")
    @classmethod
    def validate_intervals(cls, v: list[float] | None) -> list[float] | None:
        if v is None:
            return v
        for seconds in v:
            if not (0 <= seconds < float("inf")):
                raise ValueError(f"intervals must be finite and >= 0, got {seconds}")
        return v

    @model_validator(mode="after")
    def validate_single_form(self) -> ScheduleSettings:
        fixed_fields = (self.interval is not None, self.repeat is not None)
        if self.intervals is not None:
            if any(fixed_fields):
                raise ValueError("use either 'intervals' or 'interval'/'repeat', not both")
        elif not all(fixed_fields):
            raise ValueError("schedule needs 'intervals', or both 'interval' and 'repeat'")
        return self

    def to_schedule(self) -> RetrySchedule:
        return RetrySchedule.from_settings(self)


class RetryLoopSettings(BaseModel):
    """Top-level retryloop configuration."""

    model_config = {"frozen": True}

    schedules: dict[str, ScheduleSettings] = Field(default_factory=dict, description="Named schedules")
    log_level: str = Field(default="INFO", description="Log level for configure_logging()")
    log_json: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        normalized = v.upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"log_level must be DEBUG, INFO, WARNING, ERROR or CRITICAL, got {v!r}")
        return normalized

    def schedule(self, name: str) -> RetrySchedule:
        """Return the named schedule.

        Raises:
            KeyError: If no schedule has that name.
        """
        try:
            settings = self.schedules[name]
        except KeyError:
            known = ", ".join(sorted(self.schedules)) or "none"
            raise KeyError(f"Unknown retry schedule {name!r} (known: {known})") from None
        return settings.to_schedule()


# Regex pattern for ${VAR} or ${VAR:-default} syntax
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values."""

    def replacer(match: re.Match[str]) -> str:
        env_value = os.environ.get(match.group(1))
        if env_value is not None:
            return env_value
        if match.group(2) is not None:
            return match.group(2)
        # Left as-is; validation will reject it
        return match.group(0)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _ENV_VAR_PATTERN.sub(replacer, value)
        elif isinstance(value, dict):
            return {k: _expand_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [_expand_value(item) for item in value]
        else:
            return value

    return {k: _expand_value(v) for k, v in config.items()}


def load_settings(config_path: Path) -> RetryLoopSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (RETRYLOOP_*) - highest priority
    2. Config file
    3. Defaults from the Pydantic schema - lowest priority

    Top-level keys can be overridden, e.g. RETRYLOOP_LOG_LEVEL=DEBUG.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If configuration fails Pydantic validation
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="RETRYLOOP",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase top-level keys; convert to lowercase for Pydantic
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}

    raw_config = _expand_env_vars(raw_config)

    return RetryLoopSettings(**raw_config)
