"""Unified exception hierarchy for projectguard.

All errors raised by the library inherit from ProjectGuardError. This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for mapping codes back to classes (API error payloads)

Usage in request handlers:
    from projectguard.exceptions import (
        ProjectGuardError,
        PermissionDeniedError,
    )

Applications may define thin subclasses for their own errors:
    @register_error("WORKFLOW_ERROR")
    class WorkflowError(ProjectGuardError):
        code = "WORKFLOW_ERROR"
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "ProjectGuardError",
    "ConfigurationError",
    "InvalidKeyError",
    "PermissionDeniedError",
    "RoleStoreError",
    "DuplicateRoleError",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class ProjectGuardError(Exception):
    """Base exception for projectguard.

    Attributes:
        code: Stable error code string for API payloads (e.g. "PERMISSION_DENIED").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(ProjectGuardError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class InvalidKeyError(ProjectGuardError, ValueError):
    """A permission or menu key outside the closed enumeration.

    Raised for caller bugs only; it is never the result of bad store data.
    """

    code: str = "INVALID_KEY"
    message: str = "Unknown permission or menu key"


class PermissionDeniedError(ProjectGuardError):
    """The user is not allowed to perform the requested action."""

    code: str = "PERMISSION_DENIED"
    message: str = "Permission denied"


class RoleStoreError(ProjectGuardError):
    """Role repository failure."""

    code: str = "ROLE_STORE_ERROR"


class DuplicateRoleError(RoleStoreError):
    """A project already has a role with that name."""

    code: str = "DUPLICATE_ROLE"


# ---- Error Registry ---------------------------------------------------------

_E = TypeVar("_E", bound=type[ProjectGuardError])


class ErrorRegistry:
    """Registry for mapping error codes to exception classes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[ProjectGuardError]] = {}

    def register(self, code: str, error_cls: type[ProjectGuardError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[ProjectGuardError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[ProjectGuardError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Class decorator that records ``cls`` under ``code`` in :data:`error_registry`."""

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


for _cls in (
    ProjectGuardError,
    ConfigurationError,
    InvalidKeyError,
    PermissionDeniedError,
    RoleStoreError,
    DuplicateRoleError,
):
    error_registry.register(_cls.code, _cls)
