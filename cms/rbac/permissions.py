"""Role-based access control (RBAC) permissions.

Pure functions only: nothing in this module touches the request or the
database, so the role table can be tested in isolation.
"""

from collections.abc import Iterable
from enum import StrEnum


class Role(StrEnum):
    """Closed set of user roles."""

    ADMIN = "admin"
    EDITOR = "editor"
    AUTHOR = "author"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """Resolve a stored role, falling back to author when missing or unknown."""
        try:
            return cls(value) if value else cls.AUTHOR
        except ValueError:
            return cls.AUTHOR


class Permission(StrEnum):
    """Granular capabilities stamped onto a user from their role."""

    # Posts
    POSTS_CREATE = "posts.create"
    POSTS_EDIT = "posts.edit"
    POSTS_EDIT_OWN = "posts.edit.own"
    POSTS_DELETE = "posts.delete"
    POSTS_PUBLISH = "posts.publish"
    POSTS_MODERATE = "posts.moderate"
    POSTS_DRAFT = "posts.draft"

    # Categories
    CATEGORIES_CREATE = "categories.create"
    CATEGORIES_EDIT = "categories.edit"
    CATEGORIES_DELETE = "categories.delete"

    # Users
    USERS_CREATE = "users.create"
    USERS_EDIT = "users.edit"
    USERS_DELETE = "users.delete"
    USERS_ROLES = "users.roles"
    USERS_VIEW = "users.view"

    # Media
    MEDIA_UPLOAD = "media.upload"
    MEDIA_DELETE = "media.delete"
    MEDIA_MANAGE = "media.manage"
    MEDIA_OWN = "media.own"

    # Settings and analytics
    SETTINGS_EDIT = "settings.edit"
    SETTINGS_VIEW = "settings.view"
    ANALYTICS_VIEW = "analytics.view"

    # System
    SYSTEM_BACKUP = "system.backup"
    SYSTEM_MAINTENANCE = "system.maintenance"


class Action(StrEnum):
    """Operations gated by role."""

    POST_LIST = "post.list"
    POST_CREATE = "post.create"
    POST_READ = "post.read"
    POST_UPDATE = "post.update"
    POST_DELETE = "post.delete"
    CATEGORY_LIST = "category.list"
    CATEGORY_READ = "category.read"
    CATEGORY_CREATE = "category.create"
    CATEGORY_UPDATE = "category.update"
    CATEGORY_DELETE = "category.delete"
    USER_LIST = "user.list"
    USER_CREATE = "user.create"
    USER_DEACTIVATE = "user.deactivate"


ALL_ROLES = frozenset(Role)
STAFF_ROLES = frozenset({Role.ADMIN, Role.EDITOR})
ADMIN_ONLY = frozenset({Role.ADMIN})

# Role-permission mapping: what each role is granted at creation time
ROLE_PERMISSIONS: dict[Role, tuple[Permission, ...]] = {
    Role.ADMIN: (
        Permission.POSTS_CREATE,
        Permission.POSTS_EDIT,
        Permission.POSTS_DELETE,
        Permission.POSTS_PUBLISH,
        Permission.POSTS_MODERATE,
        Permission.CATEGORIES_CREATE,
        Permission.CATEGORIES_EDIT,
        Permission.CATEGORIES_DELETE,
        Permission.USERS_CREATE,
        Permission.USERS_EDIT,
        Permission.USERS_DELETE,
        Permission.USERS_ROLES,
        Permission.USERS_VIEW,
        Permission.MEDIA_UPLOAD,
        Permission.MEDIA_DELETE,
        Permission.MEDIA_MANAGE,
        Permission.SETTINGS_EDIT,
        Permission.SETTINGS_VIEW,
        Permission.ANALYTICS_VIEW,
        Permission.SYSTEM_BACKUP,
        Permission.SYSTEM_MAINTENANCE,
    ),
    Role.EDITOR: (
        Permission.POSTS_CREATE,
        Permission.POSTS_EDIT,
        Permission.POSTS_PUBLISH,
        Permission.POSTS_MODERATE,
        Permission.CATEGORIES_CREATE,
        Permission.CATEGORIES_EDIT,
        Permission.MEDIA_UPLOAD,
        Permission.MEDIA_MANAGE,
        Permission.ANALYTICS_VIEW,
        Permission.USERS_VIEW,
    ),
    Role.AUTHOR: (
        Permission.POSTS_CREATE,
        Permission.POSTS_EDIT_OWN,
        Permission.POSTS_DRAFT,
        Permission.MEDIA_UPLOAD,
        Permission.MEDIA_OWN,
    ),
}


def allowed_roles(action: Action) -> frozenset[Role]:
    """
    Return the roles allowed to perform an action.

    Args:
        action: Gated operation

    Returns:
        frozenset[Role]: Roles admitted for the action
    """
    match action:
        case (
            Action.POST_LIST
            | Action.POST_CREATE
            | Action.POST_READ
            | Action.POST_UPDATE
            | Action.CATEGORY_LIST
            | Action.CATEGORY_READ
        ):
            return ALL_ROLES
        case Action.POST_DELETE | Action.CATEGORY_CREATE | Action.CATEGORY_UPDATE:
            return STAFF_ROLES
        case (
            Action.CATEGORY_DELETE
            | Action.USER_LIST
            | Action.USER_CREATE
            | Action.USER_DEACTIVATE
        ):
            return ADMIN_ONLY


def has_role(role: Role | str | None, roles: Iterable[Role]) -> bool:
    """Check whether a (possibly unset) role is among the allowed roles."""
    return Role.parse(role) in frozenset(roles)


def is_allowed(role: Role | str | None, action: Action) -> bool:
    """Check whether a role may perform an action."""
    return has_role(role, allowed_roles(action))


def get_role_permissions(role: Role | str | None) -> list[str]:
    """Return the permission list stamped onto users of a role."""
    return [str(permission) for permission in ROLE_PERMISSIONS[Role.parse(role)]]


def has_permission(permissions: Iterable[str], required: str) -> bool:
    """
    Check a permission list for a capability.

    Exact grants match directly; ``prefix.*`` grants match any capability
    under that prefix.

    Args:
        permissions: Granted capability strings
        required: Capability being checked

    Returns:
        bool: True if the capability is granted
    """
    granted = list(permissions)
    if required in granted:
        return True

    for grant in granted:
        if grant.endswith(".*") and required.startswith(f"{grant[:-2]}."):
            return True

    return False


def can_access_resource(
    role: Role | str | None,
    permissions: Iterable[str],
    required: str,
    owner_id: str | None = None,
    user_id: str | None = None,
) -> bool:
    """
    Decide resource access from role, grants and ownership.

    Admins are always admitted. Otherwise the caller needs the capability
    itself, or must own the resource and hold ``<capability>.own``.

    Args:
        role: Caller's role
        permissions: Caller's granted capabilities
        required: Capability being checked
        owner_id: Owner of the resource
        user_id: Caller's uid

    Returns:
        bool: True if access is allowed
    """
    if Role.parse(role) is Role.ADMIN:
        return True

    granted = list(permissions)
    if has_permission(granted, required):
        return True

    if owner_id and user_id and owner_id == user_id:
        return has_permission(granted, f"{required}.own")

    return False
