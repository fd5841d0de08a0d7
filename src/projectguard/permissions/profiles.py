"""Role defaults, predefined project roles, and role auditing.

Provides:
- ``DEFAULT_PERMISSIONS`` / ``DEFAULT_VISIBLE_MENUS``: values a new role
  document is created with.
- ``PROJECT_ROLE_PROFILES``: the predefined roles seeded into every project.
- ``build_role()``: construct a Role from the keys it grants.
- ``audit_role_document()``: find stored roles lacking explicit values.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from .constants import ALL_MENUS, ALL_PERMISSIONS, MenuKey, PermissionKey, menu_key, permission_key
from .models import Role

P = PermissionKey
M = MenuKey

# ── Store defaults ──────────────────────────────────────
# A freshly created role grants the self-service basics only.

DEFAULT_PERMISSIONS: dict[str, bool] = {
    key.value: key
    in (
        P.VIEW_OWN_PROJECTS,
        P.MOVE_TASKS,
        P.SUBMIT_TIME,
        P.MANAGE_FILES,
        P.COMMENT,
        P.RECEIVE_NOTIFICATIONS,
    )
    for key in ALL_PERMISSIONS
}

DEFAULT_VISIBLE_MENUS: dict[str, bool] = {key.value: key is not M.ADMIN for key in ALL_MENUS}


def build_role(
    name: str,
    *,
    granted: Iterable[PermissionKey | str] = (),
    menus: Iterable[MenuKey | str] = (),
    description: str = "",
    project_id: Optional[str] = None,
    is_predefined: bool = False,
    is_custom: bool = False,
) -> Role:
    """Build a Role granting exactly ``granted`` and showing exactly ``menus``.

    Raises:
        InvalidKeyError: a key is not part of the enumerations.
    """
    granted_keys = {permission_key(key) for key in granted}
    menu_keys = {menu_key(key) for key in menus}
    return Role(
        name=name,
        description=description,
        project_id=project_id,
        is_predefined=is_predefined,
        is_custom=is_custom,
        permissions={key.value: key in granted_keys for key in ALL_PERMISSIONS},
        visible_menus={key.value: key in menu_keys for key in ALL_MENUS},
    )


# ── Predefined project roles ────────────────────────────


@dataclass(frozen=True)
class RoleProfile:
    """Template for a predefined project role."""

    name: str
    description: str
    granted: frozenset[PermissionKey]
    menus: frozenset[MenuKey]

    def to_role(self, project_id: Optional[str] = None) -> Role:
        return build_role(
            self.name,
            granted=self.granted,
            menus=self.menus,
            description=self.description,
            project_id=project_id,
            is_predefined=True,
        )


_EVERY_PROJECT_MENU = frozenset(ALL_MENUS) - {M.ADMIN}

PROJECT_ROLE_PROFILES: tuple[RoleProfile, ...] = (
    RoleProfile(
        name="Chef de Projet",
        description="Gestion complète du projet, équipe et budget",
        granted=frozenset(
            {
                P.VIEW_OWN_PROJECTS,
                P.EDIT_PROJECT_CHARTER,
                P.MANAGE_PROJECT_MEMBERS,
                P.CHANGE_MEMBER_ROLE,
                P.MANAGE_TASKS,
                P.MOVE_TASKS,
                P.PRIORITIZE_BACKLOG,
                P.MANAGE_SPRINTS,
                P.MODIFY_BUDGET,
                P.VIEW_BUDGET,
                P.VIEW_TIMESHEETS,
                P.SUBMIT_TIME,
                P.MANAGE_FILES,
                P.COMMENT,
                P.RECEIVE_NOTIFICATIONS,
                P.GENERATE_REPORTS,
            }
        ),
        menus=_EVERY_PROJECT_MENU,
    ),
    RoleProfile(
        name="Responsable Équipe",
        description="Gestion équipe, tâches et reporting",
        granted=frozenset(
            {
                P.VIEW_OWN_PROJECTS,
                P.MANAGE_TASKS,
                P.MOVE_TASKS,
                P.PRIORITIZE_BACKLOG,
                P.VIEW_BUDGET,
                P.VIEW_TIMESHEETS,
                P.SUBMIT_TIME,
                P.MANAGE_FILES,
                P.COMMENT,
                P.RECEIVE_NOTIFICATIONS,
                P.GENERATE_REPORTS,
            }
        ),
        menus=_EVERY_PROJECT_MENU,
    ),
    RoleProfile(
        name="Product Owner",
        description="Backlog, prioritisation et validation livrables",
        granted=frozenset(
            {
                P.VIEW_OWN_PROJECTS,
                P.MANAGE_TASKS,
                P.MOVE_TASKS,
                P.PRIORITIZE_BACKLOG,
                P.VIEW_BUDGET,
                P.VALIDATE_DELIVERABLE,
                P.MANAGE_FILES,
                P.COMMENT,
                P.RECEIVE_NOTIFICATIONS,
            }
        ),
        menus=frozenset(
            {
                M.PORTFOLIO,
                M.PROJECTS,
                M.KANBAN,
                M.BACKLOG,
                M.ROADMAP,
                M.TASKS,
                M.FILES,
                M.COMMENTS,
                M.NOTIFICATIONS,
            }
        ),
    ),
    RoleProfile(
        name="Membre Équipe",
        description="Tâches personnelles, time tracking et commentaires",
        granted=frozenset(
            {
                P.VIEW_OWN_PROJECTS,
                P.MOVE_TASKS,
                P.SUBMIT_TIME,
                P.MANAGE_FILES,
                P.COMMENT,
                P.RECEIVE_NOTIFICATIONS,
            }
        ),
        menus=frozenset(
            {
                M.PORTFOLIO,
                M.PROJECTS,
                M.KANBAN,
                M.TASKS,
                M.FILES,
                M.COMMENTS,
                M.TIMESHEETS,
                M.NOTIFICATIONS,
            }
        ),
    ),
    RoleProfile(
        name="Partie Prenante",
        description="Lecture seule - suivi et commentaires",
        granted=frozenset({P.VIEW_OWN_PROJECTS, P.COMMENT, P.RECEIVE_NOTIFICATIONS}),
        menus=frozenset({M.PORTFOLIO, M.PROJECTS, M.KANBAN, M.COMMENTS, M.NOTIFICATIONS}),
    ),
    RoleProfile(
        name="Consultant",
        description="Accès spécialisé à domaines spécifiques",
        granted=frozenset(
            {
                P.VIEW_OWN_PROJECTS,
                P.MANAGE_TASKS,
                P.MOVE_TASKS,
                P.VIEW_BUDGET,
                P.VIEW_TIMESHEETS,
                P.SUBMIT_TIME,
                P.MANAGE_FILES,
                P.COMMENT,
                P.RECEIVE_NOTIFICATIONS,
            }
        ),
        menus=_EVERY_PROJECT_MENU - {M.ROADMAP, M.REPORTS},
    ),
    RoleProfile(
        name="Responsable Fonctionnel",
        description="Rôle projet intermédiaire - Gestion spécifique avec droits modérés",
        granted=frozenset(
            {
                P.VIEW_OWN_PROJECTS,
                P.EDIT_PROJECT_CHARTER,
                P.MANAGE_TASKS,
                P.MOVE_TASKS,
                P.PRIORITIZE_BACKLOG,
                P.MANAGE_SPRINTS,
                P.VIEW_BUDGET,
                P.VIEW_TIMESHEETS,
                P.SUBMIT_TIME,
                P.MANAGE_FILES,
                P.COMMENT,
                P.RECEIVE_NOTIFICATIONS,
                P.GENERATE_REPORTS,
            }
        ),
        menus=_EVERY_PROJECT_MENU,
    ),
    RoleProfile(
        name="Auditeur",
        description="Accès lecture complète pour audits et vérifications",
        granted=frozenset(
            {
                P.VIEW_OWN_PROJECTS,
                P.VIEW_BUDGET,
                P.VIEW_TIMESHEETS,
                P.MANAGE_FILES,
                P.COMMENT,
                P.RECEIVE_NOTIFICATIONS,
                P.GENERATE_REPORTS,
                P.VIEW_AUDIT,
            }
        ),
        menus=_EVERY_PROJECT_MENU - {M.PORTFOLIO},
    ),
)


# ── Auditing stored roles ───────────────────────────────


@dataclass(frozen=True)
class RoleAudit:
    """Keys a stored role document has no usable explicit value for."""

    missing_permissions: tuple[str, ...] = ()
    missing_menus: tuple[str, ...] = ()
    non_boolean: tuple[str, ...] = ()  # "permissions.x" / "visibleMenus.y"

    @property
    def clean(self) -> bool:
        return not (self.missing_permissions or self.missing_menus or self.non_boolean)


def _audit_section(section: Any, keys: tuple[Any, ...], label: str) -> tuple[list[str], list[str]]:
    if not isinstance(section, Mapping):
        return [key.value for key in keys], []
    missing = [key.value for key in keys if key.value not in section]
    non_boolean = [
        f"{label}.{key.value}"
        for key in keys
        if key.value in section and not isinstance(section[key.value], bool)
    ]
    return missing, non_boolean


def audit_role_document(doc: Mapping[str, Any]) -> RoleAudit:
    """Report enumerated keys a stored role does not set to a real boolean.

    Such keys already resolve to denial; the audit finds documents that
    need an explicit value after the enumeration grows.
    """
    missing_perms, bad_perms = _audit_section(doc.get("permissions"), ALL_PERMISSIONS, "permissions")
    missing_menus, bad_menus = _audit_section(doc.get("visibleMenus"), ALL_MENUS, "visibleMenus")
    return RoleAudit(
        missing_permissions=tuple(missing_perms),
        missing_menus=tuple(missing_menus),
        non_boolean=tuple(bad_perms + bad_menus),
    )


__all__ = [
    "DEFAULT_PERMISSIONS",
    "DEFAULT_VISIBLE_MENUS",
    "PROJECT_ROLE_PROFILES",
    "RoleAudit",
    "RoleProfile",
    "audit_role_document",
    "build_role",
]
