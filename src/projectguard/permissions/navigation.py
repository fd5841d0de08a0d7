"""Navigation registry: which menu entries a user may reach.

An entry is available only if the merged role both grants its permission
and shows its menu section. The registry is data only; rendering belongs
to the front end.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from .constants import MenuKey, PermissionKey
from .resolver import RoleLike, UserLike, get_merged_permissions

P = PermissionKey
M = MenuKey


@dataclass(frozen=True)
class MenuItem:
    """A navigation entry and what it takes to see it."""

    label_key: str  # i18n key
    href: str
    menu_key: MenuKey
    permission_key: PermissionKey


MAIN_MENU_ITEMS: tuple[MenuItem, ...] = (
    MenuItem("dashboard", "/dashboard", M.PORTFOLIO, P.VIEW_OWN_PROJECTS),
    MenuItem("projects", "/dashboard/projects", M.PROJECTS, P.VIEW_OWN_PROJECTS),
    MenuItem("kanban", "/dashboard/kanban", M.KANBAN, P.MOVE_TASKS),
    MenuItem("backlog", "/dashboard/backlog", M.BACKLOG, P.PRIORITIZE_BACKLOG),
    MenuItem("sprints", "/dashboard/sprints", M.SPRINTS, P.MANAGE_SPRINTS),
    MenuItem("roadmap", "/dashboard/roadmap", M.ROADMAP, P.VIEW_OWN_PROJECTS),
    MenuItem("tasks", "/dashboard/tasks", M.TASKS, P.MANAGE_TASKS),
    MenuItem("files", "/dashboard/files", M.FILES, P.MANAGE_FILES),
    MenuItem("comments", "/dashboard/comments", M.COMMENTS, P.COMMENT),
    MenuItem("timesheets", "/dashboard/timesheets", M.TIMESHEETS, P.SUBMIT_TIME),
    MenuItem("budget", "/dashboard/budget", M.BUDGET, P.VIEW_BUDGET),
    MenuItem("reports", "/dashboard/reports", M.REPORTS, P.GENERATE_REPORTS),
)

ADMIN_MENU_ITEMS: tuple[MenuItem, ...] = (
    MenuItem("rolesPermissions", "/dashboard/admin/roles", M.ADMIN, P.ADMIN_CONFIG),
    MenuItem("users", "/dashboard/users", M.ADMIN, P.MANAGE_USERS),
    MenuItem("projectTemplates", "/dashboard/admin/templates", M.ADMIN, P.ADMIN_CONFIG),
    MenuItem("deliverableTypes", "/dashboard/admin/deliverable-types", M.ADMIN, P.ADMIN_CONFIG),
    MenuItem("sharepoint", "/dashboard/admin/sharepoint", M.ADMIN, P.ADMIN_CONFIG),
    MenuItem("auditLogs", "/dashboard/admin/audit", M.ADMIN, P.VIEW_AUDIT),
    MenuItem("settings", "/dashboard/settings", M.ADMIN, P.ADMIN_CONFIG),
    MenuItem("maintenance", "/dashboard/maintenance", M.ADMIN, P.ADMIN_CONFIG),
)

NOTIFICATIONS_MENU = MenuItem("notifications", "/dashboard/notifications", M.NOTIFICATIONS, P.RECEIVE_NOTIFICATIONS)

ALL_MENU_ITEMS: tuple[MenuItem, ...] = MAIN_MENU_ITEMS + ADMIN_MENU_ITEMS + (NOTIFICATIONS_MENU,)


def filter_menu_items(
    items: Iterable[MenuItem],
    user: Optional[UserLike],
    project_role: Optional[RoleLike] = None,
) -> list[MenuItem]:
    """Keep the items whose permission and menu section are both granted."""
    merged = get_merged_permissions(user, project_role)
    return [
        item
        for item in items
        if merged.permissions[item.permission_key] and merged.visible_menus[item.menu_key]
    ]


@dataclass(frozen=True)
class AvailableMenus:
    main: tuple[MenuItem, ...]
    admin: tuple[MenuItem, ...]
    notifications: Optional[MenuItem]


@dataclass(frozen=True)
class MenuStats:
    total_main: int
    total_admin: int
    has_notifications: bool
    has_admin_access: bool
    total: int


def get_available_menus(
    user: Optional[UserLike],
    project_role: Optional[RoleLike] = None,
) -> AvailableMenus:
    """Split the reachable navigation into main, admin and notifications."""
    notifications = filter_menu_items((NOTIFICATIONS_MENU,), user, project_role)
    return AvailableMenus(
        main=tuple(filter_menu_items(MAIN_MENU_ITEMS, user, project_role)),
        admin=tuple(filter_menu_items(ADMIN_MENU_ITEMS, user, project_role)),
        notifications=notifications[0] if notifications else None,
    )


def can_access_menu_item(
    href: str,
    user: Optional[UserLike],
    project_role: Optional[RoleLike] = None,
) -> bool:
    """Whether ``user`` may reach ``href``. Unknown routes are denied."""
    item = next((i for i in ALL_MENU_ITEMS if i.href == href), None)
    if item is None:
        return False
    return bool(filter_menu_items((item,), user, project_role))


def get_menu_stats(
    user: Optional[UserLike],
    project_role: Optional[RoleLike] = None,
) -> MenuStats:
    """Counts of the entries available to ``user``."""
    menus = get_available_menus(user, project_role)
    has_notifications = menus.notifications is not None
    return MenuStats(
        total_main=len(menus.main),
        total_admin=len(menus.admin),
        has_notifications=has_notifications,
        has_admin_access=bool(menus.admin),
        total=len(menus.main) + len(menus.admin) + int(has_notifications),
    )


__all__ = [
    "ADMIN_MENU_ITEMS",
    "ALL_MENU_ITEMS",
    "AvailableMenus",
    "MAIN_MENU_ITEMS",
    "MenuItem",
    "MenuStats",
    "NOTIFICATIONS_MENU",
    "can_access_menu_item",
    "filter_menu_items",
    "get_available_menus",
    "get_menu_stats",
]
