from cms.auth.permissions import (
    ActiveUserDep,
    CategoryCreateUserDep,
    CategoryDeleteUserDep,
    CategoryListUserDep,
    CategoryReadUserDep,
    CategoryUpdateUserDep,
    PostCreateUserDep,
    PostDeleteUserDep,
    PostListUserDep,
    PostReadUserDep,
    PostUpdateUserDep,
    UserCreateUserDep,
    UserDeactivateUserDep,
    UserListUserDep,
    authorize,
    require_action,
    require_active,
)

__all__ = [
    "ActiveUserDep",
    "CategoryCreateUserDep",
    "CategoryDeleteUserDep",
    "CategoryListUserDep",
    "CategoryReadUserDep",
    "CategoryUpdateUserDep",
    "PostCreateUserDep",
    "PostDeleteUserDep",
    "PostListUserDep",
    "PostReadUserDep",
    "PostUpdateUserDep",
    "UserCreateUserDep",
    "UserDeactivateUserDep",
    "UserListUserDep",
    "authorize",
    "require_action",
    "require_active",
]
