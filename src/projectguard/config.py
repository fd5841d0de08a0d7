"""Configuration contract for projectguard.

Pydantic-validated settings shared by the resolver host (request handlers,
workers) and the AccessGuard. Direct os.environ/os.getenv usage is limited
to load_config_from_env() and its helpers.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class GuardConfig(BaseModel):
    """Settings for logging and access-guard behavior.

    The permission merge itself is not configurable: explicit-true and
    most-restrictive-wins always apply.
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level for the host service",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )
    service_name: Optional[str] = Field(
        default=None,
        description="Service name attached to log records",
    )

    # Access guard
    log_denials: bool = Field(
        default=True,
        description="Log every denied check at INFO (otherwise DEBUG)",
    )
    admin_override: bool = Field(
        default=True,
        description="Let adminConfig holders bypass project membership checks",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _coerce_log_level(cls, value: Any) -> LogLevel:
        """Accept level names in any case."""
        if isinstance(value, LogLevel):
            return value
        name = value.upper() if isinstance(value, str) else None
        if name not in LogLevel.__members__:
            allowed = ", ".join(LogLevel.__members__)
            raise ValueError(f"Invalid log level {value!r} (expected one of {allowed})")
        return LogLevel[name]

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("true", "1", "yes", "on")


def load_config_from_env() -> GuardConfig:
    """Build a GuardConfig from the process environment.

    Reads ``LOG_LEVEL`` (default INFO), ``LOG_JSON``, ``SERVICE_NAME``,
    ``PROJECTGUARD_LOG_DENIALS`` and ``PROJECTGUARD_ADMIN_OVERRIDE``. The
    two PROJECTGUARD flags default to true; ``LOG_JSON`` defaults to false.
    """
    return GuardConfig(
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_json=_env_flag("LOG_JSON", False),
        service_name=os.getenv("SERVICE_NAME") or None,
        log_denials=_env_flag("PROJECTGUARD_LOG_DENIALS", True),
        admin_override=_env_flag("PROJECTGUARD_ADMIN_OVERRIDE", True),
    )


__all__ = [
    "GuardConfig",
    "LogLevel",
    "load_config_from_env",
]
