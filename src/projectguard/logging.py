"""Logging utilities for projectguard hosts.

This module provides:
- Logging configuration from GuardConfig
- Safe, length-bounded previews of values (role names, documents)
- Structured formatting with user_id / project_id propagation
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .config import GuardConfig, LogLevel, load_config_from_env

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "taskName", "exc_info", "exc_text", "stack_info",
        "user_id", "project_id",
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a single-line, length-bounded preview of a value for logging.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


class GuardFormatter(logging.Formatter):
    """Formatter that includes user/project context, as JSON or plain text."""

    def __init__(self, json_format: bool = True, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        user_id = getattr(record, "user_id", None)
        project_id = getattr(record, "project_id", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if user_id is not None:
            log_data["user_id"] = str(user_id)
        if project_id is not None:
            log_data["project_id"] = str(project_id)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        context = " ".join(
            f"{name}={log_data[name]}" for name in ("user_id", "project_id") if name in log_data
        )
        head = f"[{log_data['timestamp']}] {record.levelname} {record.name}"
        if context:
            head = f"{head} {context}"
        return f"{head}: {log_data['message']}"


class GuardLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that adds user_id and project_id to log records.

    Usage:
        logger = get_guard_logger(__name__, user_id=user.id)
        logger.info("Denied", project_id=project.id)
    """

    def __init__(
        self,
        logger: logging.Logger,
        user_id: Optional[str] = None,
        project_id: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.user_id = user_id
        self.project_id = project_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        user_id = kwargs.pop("user_id", self.user_id)
        project_id = kwargs.pop("project_id", self.project_id)

        extra = dict(kwargs.get("extra") or {})
        if user_id is not None:
            extra["user_id"] = user_id
        if project_id is not None:
            extra["project_id"] = project_id
        kwargs["extra"] = extra

        return msg, kwargs


def setup_logging(config: Optional[GuardConfig] = None) -> None:
    """Install a single GuardFormatter stream handler on the root logger.

    Existing root handlers are removed. Without ``config`` the settings are
    read from the environment.
    """
    config = config or load_config_from_env()
    # LogLevel values are the stdlib level names.
    level = logging.getLevelName(LogLevel(config.log_level).value)

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(GuardFormatter(json_format=config.log_json))
    root.addHandler(handler)
    root.setLevel(level)

    if config.service_name:
        logging.getLogger(config.service_name).setLevel(level)


def get_guard_logger(
    name: str,
    user_id: Optional[str] = None,
    project_id: Optional[str] = None,
) -> GuardLoggerAdapter:
    """Get a logger adapter bound to a user and/or project.

    Example:
        logger = get_guard_logger(__name__, user_id="u-1")
        logger.info("Checking access", project_id="p-9")
    """
    return GuardLoggerAdapter(logging.getLogger(name), user_id=user_id, project_id=project_id)


__all__ = [
    "safe_preview",
    "GuardFormatter",
    "GuardLoggerAdapter",
    "setup_logging",
    "get_guard_logger",
]
