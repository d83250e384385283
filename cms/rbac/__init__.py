from cms.rbac.permissions import (
    ROLE_PERMISSIONS,
    Action,
    Permission,
    Role,
    allowed_roles,
    can_access_resource,
    get_role_permissions,
    has_permission,
    has_role,
    is_allowed,
)

__all__ = [
    "ROLE_PERMISSIONS",
    "Action",
    "Permission",
    "Role",
    "allowed_roles",
    "can_access_resource",
    "get_role_permissions",
    "has_permission",
    "has_role",
    "is_allowed",
]
