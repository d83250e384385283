"""Tests for RBAC permissions and dependencies."""

import pytest

from cms.auth import authorize
from cms.errors import AuthorizationError, InactiveAccountError
from cms.rbac import (
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
from cms.schemas import CurrentUser


class TestRoleParse:
    """Test cases for resolving stored roles."""

    @pytest.mark.parametrize("value", ["admin", "editor", "author"])
    def test_known_roles(self, value: str) -> None:
        assert Role.parse(value) == value

    @pytest.mark.parametrize("value", [None, "", "superuser", "ADMIN"])
    def test_missing_or_unknown_role_is_author(self, value: str | None) -> None:
        """Test that missing or unknown roles fall back to author."""
        assert Role.parse(value) is Role.AUTHOR


class TestActionTable:
    """Test cases for the per-action role table."""

    def test_every_action_has_roles(self) -> None:
        """Test that the match statement covers every action."""
        for action in Action:
            assert allowed_roles(action), action

    @pytest.mark.parametrize(
        "action",
        [Action.POST_LIST, Action.POST_CREATE, Action.POST_READ, Action.POST_UPDATE],
    )
    def test_post_actions_open_to_all_roles(self, action: Action) -> None:
        assert all(is_allowed(role, action) for role in Role)

    def test_category_update_requires_staff(self) -> None:
        assert is_allowed(Role.EDITOR, Action.CATEGORY_UPDATE)
        assert is_allowed(Role.ADMIN, Action.CATEGORY_UPDATE)
        assert not is_allowed(Role.AUTHOR, Action.CATEGORY_UPDATE)

    def test_post_delete_requires_staff(self) -> None:
        assert not is_allowed(Role.AUTHOR, Action.POST_DELETE)
        assert is_allowed(Role.EDITOR, Action.POST_DELETE)

    @pytest.mark.parametrize(
        "action",
        [Action.CATEGORY_DELETE, Action.USER_LIST, Action.USER_CREATE, Action.USER_DEACTIVATE],
    )
    def test_admin_only_actions(self, action: Action) -> None:
        assert is_allowed(Role.ADMIN, action)
        assert not is_allowed(Role.EDITOR, action)
        assert not is_allowed(Role.AUTHOR, action)

    def test_unset_role_is_treated_as_author(self) -> None:
        """Test that a user without a role gets author access only."""
        assert is_allowed(None, Action.POST_CREATE)
        assert not is_allowed(None, Action.CATEGORY_CREATE)

    def test_has_role(self) -> None:
        assert has_role("editor", {Role.ADMIN, Role.EDITOR})
        assert not has_role("author", {Role.ADMIN})


class TestRolePermissions:
    """Test cases for the capability lists stamped onto users."""

    def test_every_role_has_permissions(self) -> None:
        assert set(ROLE_PERMISSIONS) == set(Role)

    def test_author_permissions(self) -> None:
        permissions = get_role_permissions(Role.AUTHOR)
        assert "posts.create" in permissions
        assert "posts.edit.own" in permissions
        assert "posts.delete" not in permissions

    def test_admin_manages_users(self) -> None:
        assert "users.roles" in get_role_permissions("admin")

    def test_unknown_role_gets_author_permissions(self) -> None:
        assert get_role_permissions("ghost") == get_role_permissions(Role.AUTHOR)


class TestHasPermission:
    """Test cases for has_permission."""

    def test_exact_match(self) -> None:
        assert has_permission(["posts.create"], "posts.create")

    def test_missing_permission(self) -> None:
        assert not has_permission(["posts.create"], "posts.delete")

    def test_wildcard_grant(self) -> None:
        """Test that ``prefix.*`` covers everything under the prefix."""
        assert has_permission(["posts.*"], "posts.delete")
        assert has_permission(["posts.*"], "posts.edit.own")

    def test_wildcard_does_not_cross_prefix(self) -> None:
        assert not has_permission(["posts.*"], "postsmeta.read")
        assert not has_permission(["posts.*"], "categories.edit")


class TestCanAccessResource:
    """Test cases for can_access_resource."""

    def test_admin_always_allowed(self) -> None:
        assert can_access_resource(Role.ADMIN, [], Permission.POSTS_EDIT, "someone", "admin-1")

    def test_direct_grant(self) -> None:
        assert can_access_resource(Role.EDITOR, ["posts.edit"], "posts.edit", "someone", "ed-1")

    def test_owner_with_own_grant(self) -> None:
        assert can_access_resource(Role.AUTHOR, ["posts.edit.own"], "posts.edit", "a-1", "a-1")

    def test_non_owner_with_own_grant(self) -> None:
        assert not can_access_resource(
            Role.AUTHOR,
            ["posts.edit.own"],
            "posts.edit",
            "a-2",
            "a-1",
        )

    def test_owner_without_own_grant(self) -> None:
        assert not can_access_resource(Role.AUTHOR, [], "posts.edit", "a-1", "a-1")


class TestAuthorize:
    """Test cases for the request-level gate."""

    def test_inactive_account_rejected_before_role(self) -> None:
        """Test that even admins are rejected while inactive."""
        user = CurrentUser(uid="admin-1", email=None, role=Role.ADMIN, active=False)
        with pytest.raises(InactiveAccountError) as exc_info:
            authorize(user, Action.POST_LIST)
        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Account is inactive"

    def test_insufficient_role(self) -> None:
        user = CurrentUser(uid="author-1", email=None, role=Role.AUTHOR)
        with pytest.raises(AuthorizationError) as exc_info:
            authorize(user, Action.CATEGORY_DELETE)
        assert exc_info.value.detail == "Insufficient permissions"

    def test_allowed(self) -> None:
        user = CurrentUser(uid="editor-1", email=None, role=Role.EDITOR)
        assert authorize(user, Action.CATEGORY_CREATE) is user
