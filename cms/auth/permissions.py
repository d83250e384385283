"""Role-based access control dependencies."""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends

from cms.dependencies.dependencies import get_current_user
from cms.errors import AuthorizationError, InactiveAccountError
from cms.rbac.permissions import Action, is_allowed
from cms.schemas.auth import CurrentUser


def authorize(user: CurrentUser, action: Action) -> CurrentUser:
    """
    Gate an action on the caller's account state and role.

    Inactive accounts are rejected before the role is considered.

    Raises:
        InactiveAccountError: If the account is deactivated
        AuthorizationError: If the role is not allowed the action
    """
    if not user.active:
        raise InactiveAccountError
    if not is_allowed(user.role, action):
        raise AuthorizationError
    return user


def require_action(action: Action) -> Callable[..., Awaitable[CurrentUser]]:
    """
    Create a dependency that requires the caller may perform an action.

    Args:
        action: Gated operation

    Returns:
        Callable: Dependency function

    Example:
        @router.delete("/{category_id}")
        async def delete_category(
            user: Annotated[CurrentUser, Depends(require_action(Action.CATEGORY_DELETE))],
        ):
            ...
    """

    async def action_checker(
        user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        return authorize(user, action)

    return action_checker


async def require_active(
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency for endpoints open to any active user (ownership checked later)."""
    if not user.active:
        raise InactiveAccountError
    return user


ActiveUserDep = Annotated[CurrentUser, Depends(require_active)]

PostListUserDep = Annotated[CurrentUser, Depends(require_action(Action.POST_LIST))]
PostCreateUserDep = Annotated[CurrentUser, Depends(require_action(Action.POST_CREATE))]
PostReadUserDep = Annotated[CurrentUser, Depends(require_action(Action.POST_READ))]
PostUpdateUserDep = Annotated[CurrentUser, Depends(require_action(Action.POST_UPDATE))]
PostDeleteUserDep = Annotated[CurrentUser, Depends(require_action(Action.POST_DELETE))]
CategoryListUserDep = Annotated[CurrentUser, Depends(require_action(Action.CATEGORY_LIST))]
CategoryReadUserDep = Annotated[CurrentUser, Depends(require_action(Action.CATEGORY_READ))]
CategoryCreateUserDep = Annotated[CurrentUser, Depends(require_action(Action.CATEGORY_CREATE))]
CategoryUpdateUserDep = Annotated[CurrentUser, Depends(require_action(Action.CATEGORY_UPDATE))]
CategoryDeleteUserDep = Annotated[CurrentUser, Depends(require_action(Action.CATEGORY_DELETE))]
UserListUserDep = Annotated[CurrentUser, Depends(require_action(Action.USER_LIST))]
UserCreateUserDep = Annotated[CurrentUser, Depends(require_action(Action.USER_CREATE))]
UserDeactivateUserDep = Annotated[CurrentUser, Depends(require_action(Action.USER_DEACTIVATE))]
