"""Role repository interface and project role seeding.

Roles are owned by an external store. Callers inject a RoleRepository;
the library keeps no global store of its own.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from .exceptions import DuplicateRoleError, RoleStoreError
from .permissions.models import Role
from .permissions.profiles import PROJECT_ROLE_PROFILES

logger = logging.getLogger(__name__)


class RoleRepository(ABC):
    """Read/write access to system and project roles."""

    @abstractmethod
    def get_system_role(self, role_id: str) -> Optional[Role]:
        raise NotImplementedError

    @abstractmethod
    def get_project_role(self, project_id: str, name: str) -> Optional[Role]:
        raise NotImplementedError

    @abstractmethod
    def list_project_roles(self, project_id: str) -> List[Role]:
        raise NotImplementedError

    @abstractmethod
    def add_project_role(self, role: Role) -> Role:
        """Store a project role. Names are unique per project."""
        raise NotImplementedError


class InMemoryRoleRepository(RoleRepository):
    """Dict-backed repository for tests and single-process hosts."""

    def __init__(self, system_roles: Optional[Dict[str, Role]] = None) -> None:
        self._system_roles: Dict[str, Role] = dict(system_roles or {})
        self._project_roles: Dict[Tuple[str, str], Role] = {}

    def add_system_role(self, role_id: str, role: Role) -> Role:
        self._system_roles[str(role_id)] = role
        return role

    def get_system_role(self, role_id: str) -> Optional[Role]:
        return self._system_roles.get(str(role_id))

    def get_project_role(self, project_id: str, name: str) -> Optional[Role]:
        return self._project_roles.get((str(project_id), name))

    def list_project_roles(self, project_id: str) -> List[Role]:
        pid = str(project_id)
        return [role for (owner, _), role in self._project_roles.items() if owner == pid]

    def add_project_role(self, role: Role) -> Role:
        if role.project_id is None:
            raise RoleStoreError("Project role has no project_id", role=role.name)
        key = (role.project_id, role.name)
        if key in self._project_roles:
            raise DuplicateRoleError(
                f"Role '{role.name}' already exists in project {role.project_id}",
                project_id=role.project_id,
                role=role.name,
            )
        self._project_roles[key] = role
        return role


def initialize_project_roles(repository: RoleRepository, project_id: str) -> List[Role]:
    """Seed the predefined project roles for ``project_id``.

    Idempotent: roles that already exist are returned as stored, never
    duplicated or overwritten.
    """
    pid = str(project_id)
    roles: List[Role] = []
    created = 0

    for profile in PROJECT_ROLE_PROFILES:
        existing = repository.get_project_role(pid, profile.name)
        if existing is not None:
            roles.append(existing)
            continue
        roles.append(repository.add_project_role(profile.to_role(pid)))
        created += 1

    logger.info(
        "Project roles initialized for %s (created=%d, existing=%d)",
        pid,
        created,
        len(roles) - created,
    )
    return roles


__all__ = [
    "InMemoryRoleRepository",
    "RoleRepository",
    "initialize_project_roles",
]
