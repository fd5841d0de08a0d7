from .config import GuardConfig, LogLevel, load_config_from_env
from .exceptions import (
    ConfigurationError,
    DuplicateRoleError,
    InvalidKeyError,
    PermissionDeniedError,
    ProjectGuardError,
    RoleStoreError,
)
from .guard import AccessGuard, GuardResult
from .logging import (
    GuardFormatter,
    GuardLoggerAdapter,
    get_guard_logger,
    safe_preview,
    setup_logging,
)
from .permissions import (
    ADMIN_MENU_ITEMS,
    ADMIN_PERMISSION,
    ALL_MENUS,
    ALL_PERMISSIONS,
    DEFAULT_PERMISSIONS,
    DEFAULT_VISIBLE_MENUS,
    MAIN_MENU_ITEMS,
    NOTIFICATIONS_MENU,
    PROJECT_ROLE_PROFILES,
    AccessibleData,
    AvailableMenus,
    EffectivePermissionSet,
    MenuItem,
    MenuKey,
    MenuStats,
    PermissionKey,
    Project,
    ProjectMember,
    Role,
    RoleAudit,
    RoleProfile,
    User,
    audit_role_document,
    build_role,
    can_access_menu_item,
    can_access_project_resource,
    filter_menu_items,
    get_accessible_data,
    get_available_menus,
    get_menu_stats,
    get_merged_permissions,
    get_visible_menus,
    has_permission,
    is_member,
    is_menu_visible,
    menu_key,
    merge_roles,
    permission_key,
    require_permission,
)
from .store import InMemoryRoleRepository, RoleRepository, initialize_project_roles

__all__ = [
    'GuardConfig',
    'LogLevel',
    'load_config_from_env',
    'ProjectGuardError',
    'ConfigurationError',
    'InvalidKeyError',
    'PermissionDeniedError',
    'RoleStoreError',
    'DuplicateRoleError',
    'AccessGuard',
    'GuardResult',
    'GuardFormatter',
    'GuardLoggerAdapter',
    'get_guard_logger',
    'safe_preview',
    'setup_logging',
    'ADMIN_MENU_ITEMS',
    'ADMIN_PERMISSION',
    'ALL_MENUS',
    'ALL_PERMISSIONS',
    'DEFAULT_PERMISSIONS',
    'DEFAULT_VISIBLE_MENUS',
    'MAIN_MENU_ITEMS',
    'NOTIFICATIONS_MENU',
    'PROJECT_ROLE_PROFILES',
    'AccessibleData',
    'AvailableMenus',
    'EffectivePermissionSet',
    'MenuItem',
    'MenuKey',
    'MenuStats',
    'PermissionKey',
    'Project',
    'ProjectMember',
    'Role',
    'RoleAudit',
    'RoleProfile',
    'User',
    'audit_role_document',
    'build_role',
    'can_access_menu_item',
    'can_access_project_resource',
    'filter_menu_items',
    'get_accessible_data',
    'get_available_menus',
    'get_menu_stats',
    'get_merged_permissions',
    'get_visible_menus',
    'has_permission',
    'is_member',
    'is_menu_visible',
    'menu_key',
    'merge_roles',
    'permission_key',
    'require_permission',
    'InMemoryRoleRepository',
    'RoleRepository',
    'initialize_project_roles',
]
