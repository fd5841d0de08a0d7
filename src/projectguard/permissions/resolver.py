"""Two-tier permission resolver.

Merges a user's system role with an optional project role and answers
point queries on the result. Two rules hold everywhere:

1. **Explicit true**: a grant exists only where the stored value is the
   boolean ``True``. Missing fields, ``None``, ``"yes"``, ``1`` all deny.
2. **Most restrictive wins**: with a project role present, both roles must
   grant. A project role can narrow a system role, never widen it.

Every function accepts the models from :mod:`.models` or the equivalent raw
store mappings. Malformed data degrades to denial; only a key outside the
closed enumerations raises (:class:`~projectguard.exceptions.InvalidKeyError`).

Functions are pure and synchronous: no I/O, no caching, no shared state.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Optional, Union

from ..exceptions import PermissionDeniedError
from .constants import (
    ADMIN_PERMISSION,
    ALL_MENUS,
    ALL_PERMISSIONS,
    MenuKey,
    PermissionKey,
    menu_key,
    permission_key,
)
from .models import Project, Role, User

logger = logging.getLogger(__name__)

RoleLike = Union[Role, Mapping[str, Any]]
UserLike = Union[User, Mapping[str, Any]]
ProjectLike = Union[Project, Mapping[str, Any]]

_EMPTY: Mapping[str, Any] = MappingProxyType({})


# ── Source access ───────────────────────────────────────


def _permission_flags(role: Optional[RoleLike]) -> Mapping[str, Any]:
    if isinstance(role, Role):
        return role.permissions
    if isinstance(role, Mapping):
        flags = role.get("permissions")
        if isinstance(flags, Mapping):
            return flags
    return _EMPTY


def _menu_flags(role: Optional[RoleLike]) -> Mapping[str, Any]:
    if isinstance(role, Role):
        return role.visible_menus
    if isinstance(role, Mapping):
        flags = role.get("visibleMenus", role.get("visible_menus"))
        if isinstance(flags, Mapping):
            return flags
    return _EMPTY


def _system_role(user: Optional[UserLike]) -> Optional[RoleLike]:
    """The user's populated system role, or None."""
    if isinstance(user, User):
        return user.role
    if isinstance(user, Mapping):
        # Back-end documents populate ``role_id``; front-end payloads use ``role``.
        role = user.get("role_id")
        if role is None:
            role = user.get("role")
        if isinstance(role, (Role, Mapping)):
            return role
    return None


def _user_id(user: Optional[UserLike]) -> Optional[str]:
    if isinstance(user, User):
        return user.id
    if isinstance(user, Mapping):
        raw = user.get("_id", user.get("id"))
        return None if raw is None else str(raw)
    return None


# ── Merge ───────────────────────────────────────────────


@dataclass(frozen=True)
class EffectivePermissionSet:
    """Merged result of a system role and an optional project role.

    Both maps cover every enumerated key. Recomputed per check, never stored.
    """

    permissions: Mapping[PermissionKey, bool]
    visible_menus: Mapping[MenuKey, bool]

    def allows(self, permission: PermissionKey | str) -> bool:
        """Whether the merged set grants ``permission``."""
        return self.permissions[permission_key(permission)]

    def shows(self, menu: MenuKey | str) -> bool:
        """Whether the merged set shows the ``menu`` section."""
        return self.visible_menus[menu_key(menu)]

    def granted(self) -> frozenset[PermissionKey]:
        """Permissions the merged set grants."""
        return frozenset(key for key, allowed in self.permissions.items() if allowed)

    def visible(self) -> frozenset[MenuKey]:
        """Menu sections the merged set shows."""
        return frozenset(key for key, shown in self.visible_menus.items() if shown)

    def to_dict(self) -> dict[str, dict[str, bool]]:
        """Plain payload keyed by wire names, e.g. for ``GET /auth/me``."""
        return {
            "permissions": {key.value: allowed for key, allowed in self.permissions.items()},
            "visibleMenus": {key.value: shown for key, shown in self.visible_menus.items()},
        }


def merge_roles(
    system_role: Optional[RoleLike],
    project_role: Optional[RoleLike] = None,
) -> EffectivePermissionSet:
    """Merge a system role with an optional project role.

    ``result[p]`` is True iff the system role explicitly grants ``p`` and,
    when a project role is given, the project role explicitly grants it too.
    A missing system role yields an all-False set. A project role that is
    present but empty (``{}``) narrows everything to False.
    """
    system_perms = _permission_flags(system_role)
    system_menus = _menu_flags(system_role)

    narrowing = project_role is not None
    project_perms = _permission_flags(project_role)
    project_menus = _menu_flags(project_role)

    permissions = {
        key: system_perms.get(key.value) is True
        and (not narrowing or project_perms.get(key.value) is True)
        for key in ALL_PERMISSIONS
    }
    menus = {
        key: system_menus.get(key.value) is True
        and (not narrowing or project_menus.get(key.value) is True)
        for key in ALL_MENUS
    }
    return EffectivePermissionSet(
        permissions=MappingProxyType(permissions),
        visible_menus=MappingProxyType(menus),
    )


def get_merged_permissions(
    user: Optional[UserLike],
    project_role: Optional[RoleLike] = None,
) -> EffectivePermissionSet:
    """Merged permissions for ``user``; all-False when user or role is absent."""
    return merge_roles(_system_role(user), project_role)


# ── Point queries ───────────────────────────────────────


def has_permission(
    user: Optional[UserLike],
    permission: PermissionKey | str,
    project_role: Optional[RoleLike] = None,
) -> bool:
    """Check a single permission for ``user``, optionally narrowed by a project role.

    Agrees with ``merge_roles(system_role, project_role).permissions[permission]``
    for every input.

    Raises:
        InvalidKeyError: ``permission`` is not a known key.
    """
    key = permission_key(permission)

    system_role = _system_role(user)
    if system_role is None:
        return False

    system_allows = _permission_flags(system_role).get(key.value) is True
    if project_role is None:
        return system_allows

    return system_allows and _permission_flags(project_role).get(key.value) is True


def get_visible_menus(
    user: Optional[UserLike],
    project_role: Optional[RoleLike] = None,
) -> frozenset[MenuKey]:
    """Menu sections visible to ``user`` after the merge."""
    return get_merged_permissions(user, project_role).visible()


def is_menu_visible(
    user: Optional[UserLike],
    menu: MenuKey | str,
    project_role: Optional[RoleLike] = None,
) -> bool:
    """Whether ``menu`` is in :func:`get_visible_menus`.

    Raises:
        InvalidKeyError: ``menu`` is not a known key.
    """
    key = menu_key(menu)
    return key in get_visible_menus(user, project_role)


def require_permission(
    user: Optional[UserLike],
    permission: PermissionKey | str,
    project_role: Optional[RoleLike] = None,
) -> None:
    """Raise PermissionDeniedError unless :func:`has_permission` holds."""
    key = permission_key(permission)
    if not has_permission(user, key, project_role):
        raise PermissionDeniedError(
            f"Missing permission: {key.value}",
            permission=key.value,
            user_id=_user_id(user),
        )


# ── Project membership ──────────────────────────────────


def is_member(user_id: Optional[str], project: Optional[ProjectLike]) -> bool:
    """Whether ``user_id`` leads, owns or is listed on ``project``.

    Identifiers are compared as strings; an absent id or project is not a member.
    """
    if user_id is None or project is None:
        return False
    if isinstance(project, Mapping):
        project = Project.from_document(project)
    if not isinstance(project, Project):
        return False

    uid = str(user_id)
    return (
        project.lead_id == uid
        or project.product_owner_id == uid
        or project.member(uid) is not None
    )


def can_access_project_resource(
    user: Optional[UserLike],
    project: Optional[ProjectLike],
    permission: PermissionKey | str,
    *,
    admin_override: bool = True,
) -> bool:
    """Check a system-role permission plus project membership.

    Holders of ``adminConfig`` pass unconditionally (unless
    ``admin_override`` is False). Everyone else needs the system role to grant
    ``permission`` *and* membership of ``project``.

    Unlike :func:`has_permission`, no project role is merged here.

    Raises:
        InvalidKeyError: ``permission`` is not a known key.
    """
    key = permission_key(permission)

    system_role = _system_role(user)
    if system_role is None:
        return False

    system_perms = _permission_flags(system_role)
    if admin_override and system_perms.get(ADMIN_PERMISSION.value) is True:
        logger.debug("adminConfig override for user %s on %s", _user_id(user), key.value)
        return True

    if system_perms.get(key.value) is not True:
        return False

    return is_member(_user_id(user), project)


# ── UI summary ──────────────────────────────────────────


@dataclass(frozen=True)
class AccessibleData:
    """What a user can see and do in a project, flattened for the UI."""

    can_view_budget: bool = False
    can_modify_budget: bool = False
    can_view_timesheets: bool = False
    can_submit_timesheet: bool = False
    can_view_reports: bool = False
    can_view_audit: bool = False
    can_manage_members: bool = False
    can_change_roles: bool = False
    can_manage_tasks: bool = False
    can_move_tasks: bool = False
    can_prioritize_backlog: bool = False
    can_manage_sprints: bool = False
    can_validate_deliverables: bool = False
    can_comment: bool = False
    can_manage_files: bool = False
    can_edit_project: bool = False
    can_create_project: bool = False
    can_delete_project: bool = False
    can_view_all_projects: bool = False


_ACCESSIBLE_DATA_FIELDS: dict[str, PermissionKey] = {
    "can_view_budget": PermissionKey.VIEW_BUDGET,
    "can_modify_budget": PermissionKey.MODIFY_BUDGET,
    "can_view_timesheets": PermissionKey.VIEW_TIMESHEETS,
    "can_submit_timesheet": PermissionKey.SUBMIT_TIME,
    "can_view_reports": PermissionKey.GENERATE_REPORTS,
    "can_view_audit": PermissionKey.VIEW_AUDIT,
    "can_manage_members": PermissionKey.MANAGE_PROJECT_MEMBERS,
    "can_change_roles": PermissionKey.CHANGE_MEMBER_ROLE,
    "can_manage_tasks": PermissionKey.MANAGE_TASKS,
    "can_move_tasks": PermissionKey.MOVE_TASKS,
    "can_prioritize_backlog": PermissionKey.PRIORITIZE_BACKLOG,
    "can_manage_sprints": PermissionKey.MANAGE_SPRINTS,
    "can_validate_deliverables": PermissionKey.VALIDATE_DELIVERABLE,
    "can_comment": PermissionKey.COMMENT,
    "can_manage_files": PermissionKey.MANAGE_FILES,
    "can_edit_project": PermissionKey.EDIT_PROJECT_CHARTER,
    "can_create_project": PermissionKey.CREATE_PROJECT,
    "can_delete_project": PermissionKey.DELETE_PROJECT,
    "can_view_all_projects": PermissionKey.VIEW_ALL_PROJECTS,
}


def get_accessible_data(
    user: Optional[UserLike],
    project_role: Optional[RoleLike] = None,
) -> AccessibleData:
    """Summarize the merged permissions as UI capability flags."""
    merged = get_merged_permissions(user, project_role)
    return AccessibleData(
        **{field: merged.permissions[key] for field, key in _ACCESSIBLE_DATA_FIELDS.items()}
    )


__all__ = [
    "AccessibleData",
    "EffectivePermissionSet",
    "can_access_project_resource",
    "get_accessible_data",
    "get_merged_permissions",
    "get_visible_menus",
    "has_permission",
    "is_member",
    "is_menu_visible",
    "merge_roles",
    "require_permission",
]
