"""Permission and menu enumerations.

Provides:
- ``PermissionKey``: the closed set of atomic capabilities.
- ``MenuKey``: the closed set of UI sections whose visibility a role controls.
- ``permission_key()`` / ``menu_key()``: strict coercion from wire strings.

Enum *values* are the field names used in stored role documents
(``permissions.gererTaches``, ``visibleMenus.budget``) and must not change
without migrating every stored role.
"""

from __future__ import annotations

from enum import Enum

from ..exceptions import InvalidKeyError


class PermissionKey(str, Enum):
    """Atomic capabilities a role can grant."""

    # ── Projects ────────────────────────────────────────
    VIEW_ALL_PROJECTS = "voirTousProjets"
    VIEW_OWN_PROJECTS = "voirSesProjets"
    CREATE_PROJECT = "creerProjet"
    DELETE_PROJECT = "supprimerProjet"
    EDIT_PROJECT_CHARTER = "modifierCharteProjet"
    MANAGE_PROJECT_MEMBERS = "gererMembresProjet"
    CHANGE_MEMBER_ROLE = "changerRoleMembre"

    # ── Delivery ────────────────────────────────────────
    MANAGE_TASKS = "gererTaches"
    MOVE_TASKS = "deplacerTaches"
    PRIORITIZE_BACKLOG = "prioriserBacklog"
    MANAGE_SPRINTS = "gererSprints"
    VALIDATE_DELIVERABLE = "validerLivrable"

    # ── Budget & time ───────────────────────────────────
    MODIFY_BUDGET = "modifierBudget"
    VIEW_BUDGET = "voirBudget"
    VIEW_TIMESHEETS = "voirTempsPasses"
    SUBMIT_TIME = "saisirTemps"

    # ── Collaboration ───────────────────────────────────
    MANAGE_FILES = "gererFichiers"
    COMMENT = "commenter"
    RECEIVE_NOTIFICATIONS = "recevoirNotifications"
    GENERATE_REPORTS = "genererRapports"

    # ── Administration ──────────────────────────────────
    VIEW_AUDIT = "voirAudit"
    MANAGE_USERS = "gererUtilisateurs"
    ADMIN_CONFIG = "adminConfig"  # Super-admin: bypasses project membership

    def __str__(self) -> str:
        return self.value


class MenuKey(str, Enum):
    """UI sections whose visibility a role controls."""

    PORTFOLIO = "portfolio"
    PROJECTS = "projects"
    KANBAN = "kanban"
    BACKLOG = "backlog"
    SPRINTS = "sprints"
    ROADMAP = "roadmap"
    TASKS = "tasks"
    FILES = "files"
    COMMENTS = "comments"
    TIMESHEETS = "timesheets"
    BUDGET = "budget"
    REPORTS = "reports"
    NOTIFICATIONS = "notifications"
    ADMIN = "admin"

    def __str__(self) -> str:
        return self.value


ALL_PERMISSIONS: tuple[PermissionKey, ...] = tuple(PermissionKey)
ALL_MENUS: tuple[MenuKey, ...] = tuple(MenuKey)

ADMIN_PERMISSION = PermissionKey.ADMIN_CONFIG


def permission_key(key: PermissionKey | str) -> PermissionKey:
    """Coerce a wire name or enum member to a PermissionKey.

    Raises:
        InvalidKeyError: ``key`` is not part of the enumeration.
    """
    if isinstance(key, PermissionKey):
        return key
    if isinstance(key, str):
        try:
            return PermissionKey(key)
        except ValueError:
            pass
    raise InvalidKeyError(f"Unknown permission key: {key!r}", key=key)


def menu_key(key: MenuKey | str) -> MenuKey:
    """Coerce a wire name or enum member to a MenuKey.

    Raises:
        InvalidKeyError: ``key`` is not part of the enumeration.
    """
    if isinstance(key, MenuKey):
        return key
    if isinstance(key, str):
        try:
            return MenuKey(key)
        except ValueError:
            pass
    raise InvalidKeyError(f"Unknown menu key: {key!r}", key=key)


__all__ = [
    "ADMIN_PERMISSION",
    "ALL_MENUS",
    "ALL_PERMISSIONS",
    "MenuKey",
    "PermissionKey",
    "menu_key",
    "permission_key",
]
