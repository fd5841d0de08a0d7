"""Access guard for request handlers.

Provides:
- ``GuardResult``: result of an access check (allowed/denied + reason).
- ``AccessGuard``: resolves the user's project role through an injected
  RoleRepository, then applies the two-tier merge.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .config import GuardConfig
from .exceptions import PermissionDeniedError
from .logging import get_guard_logger
from .permissions.constants import MenuKey, PermissionKey, permission_key
from .permissions.models import Project, Role, User
from .permissions.resolver import (
    can_access_project_resource,
    get_visible_menus,
    has_permission,
)
from .store import RoleRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GuardResult:
    """Result from an access check."""

    allowed: bool = False
    reason: str = ""
    project_role: Optional[str] = None

    @property
    def denied(self) -> bool:
        return not self.allowed


class AccessGuard:
    """Two-tier access checks bound to a role repository.

    Without a project, only the system role applies. With a project, the
    user's member entry names a project role, which narrows the system role.
    """

    def __init__(self, repository: RoleRepository, config: GuardConfig | None = None) -> None:
        self._repository = repository
        self._config = config or GuardConfig()

    @property
    def config(self) -> GuardConfig:
        return self._config

    def project_role_for(self, user: Optional[User], project: Optional[Project]) -> Optional[Role]:
        """The project role ``user`` holds in ``project``, or None.

        None when the user is not a listed member or the entry has no role
        name. When the named role is missing from the repository, an empty
        role carrying that name is returned, so every check through it denies.
        """
        if user is None or user.id is None or project is None or project.id is None:
            return None
        entry = project.member(user.id)
        if entry is None or not entry.project_role:
            return None
        role = self._repository.get_project_role(project.id, entry.project_role)
        if role is None:
            logger.warning(
                "Project %s references unknown project role '%s'; denying its checks",
                project.id,
                entry.project_role,
            )
            return Role(name=entry.project_role, project_id=project.id)
        return role

    def check(
        self,
        user: Optional[User],
        permission: PermissionKey | str,
        project: Optional[Project] = None,
    ) -> GuardResult:
        """Check ``permission`` for ``user``, narrowed by their role in ``project``.

        Raises:
            InvalidKeyError: ``permission`` is not a known key.
        """
        key = permission_key(permission)
        project_role = self.project_role_for(user, project)

        if user is None or user.role is None:
            result = GuardResult(allowed=False, reason="no system role")
        elif has_permission(user, key, project_role):
            result = GuardResult(
                allowed=True,
                project_role=project_role.name if project_role else None,
            )
        elif project_role is not None and has_permission(user, key):
            result = GuardResult(
                allowed=False,
                reason=f"project role '{project_role.name}' does not grant {key.value}",
                project_role=project_role.name,
            )
        else:
            result = GuardResult(allowed=False, reason=f"system role does not grant {key.value}")

        if result.denied:
            self._log_denial(user, project, result)
        return result

    def enforce(
        self,
        user: Optional[User],
        permission: PermissionKey | str,
        project: Optional[Project] = None,
    ) -> None:
        """Raise PermissionDeniedError unless :meth:`check` allows."""
        result = self.check(user, permission, project)
        if result.denied:
            raise PermissionDeniedError(
                f"Permission denied: {result.reason}",
                permission=permission_key(permission).value,
                user_id=user.id if user else None,
                project_id=project.id if project else None,
            )

    def can_access_resource(
        self,
        user: Optional[User],
        project: Optional[Project],
        permission: PermissionKey | str,
    ) -> bool:
        """System role plus membership, honoring ``config.admin_override``."""
        allowed = can_access_project_resource(
            user,
            project,
            permission,
            admin_override=self._config.admin_override,
        )
        if not allowed:
            self._log_denial(
                user,
                project,
                GuardResult(allowed=False, reason=f"resource access to {permission_key(permission).value}"),
            )
        return allowed

    def visible_menus(self, user: Optional[User], project: Optional[Project] = None) -> frozenset[MenuKey]:
        return get_visible_menus(user, self.project_role_for(user, project))

    def _log_denial(self, user: Optional[User], project: Optional[Project], result: GuardResult) -> None:
        level = logging.INFO if self._config.log_denials else logging.DEBUG
        bound = get_guard_logger(
            __name__,
            user_id=user.id if user else None,
            project_id=project.id if project else None,
        )
        bound.log(level, "Access denied: %s", result.reason)


__all__ = [
    "AccessGuard",
    "GuardResult",
]
