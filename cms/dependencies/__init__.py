from cms.dependencies.dependencies import (
    CategoryListQueryDep,
    CategoryRepoDep,
    CategoryServiceDep,
    CurrentUserDep,
    IdentityDep,
    PostLifecycleDep,
    PostListQueryDep,
    PostRepoDep,
    ServicesDep,
    SessionDep,
    UserListQueryDep,
    UserRepoDep,
    UserServiceDep,
    get_current_user,
    get_services,
    get_session,
)

__all__ = [
    "CategoryListQueryDep",
    "CategoryRepoDep",
    "CategoryServiceDep",
    "CurrentUserDep",
    "IdentityDep",
    "PostLifecycleDep",
    "PostListQueryDep",
    "PostRepoDep",
    "ServicesDep",
    "SessionDep",
    "UserListQueryDep",
    "UserRepoDep",
    "UserServiceDep",
    "get_current_user",
    "get_services",
    "get_session",
]
