"""Two-tier RBAC: permission registry, role models and the resolver.

Defines:
- PermissionKey / MenuKey: the closed key enumerations
- Role / User / Project: immutable inputs, with store-document adapters
- merge_roles() and point queries: most-restrictive-wins, explicit-true merge
- PROJECT_ROLE_PROFILES: predefined project roles
- Navigation registry filtered by merged permissions
"""

from .constants import (
    ADMIN_PERMISSION,
    ALL_MENUS,
    ALL_PERMISSIONS,
    MenuKey,
    PermissionKey,
    menu_key,
    permission_key,
)
from .models import Project, ProjectMember, Role, User
from .navigation import (
    ADMIN_MENU_ITEMS,
    MAIN_MENU_ITEMS,
    NOTIFICATIONS_MENU,
    AvailableMenus,
    MenuItem,
    MenuStats,
    can_access_menu_item,
    filter_menu_items,
    get_available_menus,
    get_menu_stats,
)
from .profiles import (
    DEFAULT_PERMISSIONS,
    DEFAULT_VISIBLE_MENUS,
    PROJECT_ROLE_PROFILES,
    RoleAudit,
    RoleProfile,
    audit_role_document,
    build_role,
)
from .resolver import (
    AccessibleData,
    EffectivePermissionSet,
    can_access_project_resource,
    get_accessible_data,
    get_merged_permissions,
    get_visible_menus,
    has_permission,
    is_member,
    is_menu_visible,
    merge_roles,
    require_permission,
)

__all__ = [
    "ADMIN_MENU_ITEMS",
    "ADMIN_PERMISSION",
    "ALL_MENUS",
    "ALL_PERMISSIONS",
    "AccessibleData",
    "AvailableMenus",
    "DEFAULT_PERMISSIONS",
    "DEFAULT_VISIBLE_MENUS",
    "EffectivePermissionSet",
    "MAIN_MENU_ITEMS",
    "MenuItem",
    "MenuKey",
    "MenuStats",
    "NOTIFICATIONS_MENU",
    "PROJECT_ROLE_PROFILES",
    "PermissionKey",
    "Project",
    "ProjectMember",
    "Role",
    "RoleAudit",
    "RoleProfile",
    "User",
    "audit_role_document",
    "build_role",
    "can_access_menu_item",
    "can_access_project_resource",
    "filter_menu_items",
    "get_accessible_data",
    "get_available_menus",
    "get_menu_stats",
    "get_merged_permissions",
    "get_visible_menus",
    "has_permission",
    "is_member",
    "is_menu_visible",
    "menu_key",
    "merge_roles",
    "permission_key",
    "require_permission",
]
