# cms/dependencies/dependencies.py

"""Request dependencies: services, sessions, authentication and list queries."""

from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from cms.clients.protocols import IdentityProvider
from cms.db.database import transaction
from cms.errors import AuthenticationError, MissingCredentialsError
from cms.rbac.permissions import Role
from cms.repositories import CategoryRepository, PostRepository, UserRepository
from cms.schemas.auth import CurrentUser
from cms.schemas.post import PostStatus
from cms.services.categories import CategoryService
from cms.services.category_integrity import CategoryIntegrityChecker
from cms.services.container import ServiceContainer
from cms.services.counters import CounterMaintainer
from cms.services.pagination import PageParams
from cms.services.post_lifecycle import PostLifecycleManager
from cms.services.users import UserService

bearer_scheme = HTTPBearer(auto_error=False, description="Identity provider ID token")

# Same status and message whether the token is bad or the subject is unknown
AUTHENTICATION_FAILED = "Authentication failed"


def get_services(request: Request) -> ServiceContainer:
    """Return the service container created by the application lifespan."""
    return request.app.state.services


ServicesDep = Annotated[ServiceContainer, Depends(get_services)]


async def get_session(services: ServicesDep) -> AsyncGenerator[AsyncSession]:
    """
    Dependency providing one transactional session per request.

    Commits when the handler succeeds and rolls back when it raises.

    Yields:
        AsyncSession: Database session
    """
    async with transaction(services.session_maker) as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_identity_provider(services: ServicesDep) -> IdentityProvider:
    return services.identity


IdentityDep = Annotated[IdentityProvider, Depends(get_identity_provider)]


def get_post_repository(session: SessionDep) -> PostRepository:
    return PostRepository(session)


def get_category_repository(session: SessionDep) -> CategoryRepository:
    return CategoryRepository(session)


def get_user_repository(session: SessionDep) -> UserRepository:
    return UserRepository(session)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
CategoryRepoDep = Annotated[CategoryRepository, Depends(get_category_repository)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    identity: IdentityDep,
    users: UserRepoDep,
) -> CurrentUser:
    """
    Resolve the caller from the bearer token and their user record.

    Inactive users are still returned; the permission gate rejects them
    before any role check.

    Parameters
    ----------
    credentials : HTTPAuthorizationCredentials | None
        Parsed ``Authorization: Bearer`` header, None when absent or malformed.
    identity : IdentityProvider
        Token verifier.
    users : UserRepository
        User directory.

    Returns
    -------
    CurrentUser
        The authenticated caller.

    Raises
    ------
    AuthenticationError
        If the header is missing, the token is invalid or no user record exists.
    """
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise MissingCredentialsError

    claims = await identity.verify_id_token(credentials.credentials)

    user = await users.get_by_id(claims.uid)
    if user is None:
        raise AuthenticationError(AUTHENTICATION_FAILED)

    return CurrentUser(
        uid=user.uid,
        email=claims.email or user.email,
        role=Role.parse(user.role),
        permissions=tuple(user.permissions or ()),
        active=user.active is not False,
    )


CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]


def get_counter_maintainer(
    categories: CategoryRepoDep,
    users: UserRepoDep,
) -> CounterMaintainer:
    return CounterMaintainer(categories, users)


def get_post_lifecycle(
    posts: PostRepoDep,
    categories: CategoryRepoDep,
    counters: Annotated[CounterMaintainer, Depends(get_counter_maintainer)],
) -> PostLifecycleManager:
    return PostLifecycleManager(posts, categories, counters)


def get_category_service(
    categories: CategoryRepoDep,
    posts: PostRepoDep,
) -> CategoryService:
    return CategoryService(categories, CategoryIntegrityChecker(categories, posts))


def get_user_service(
    users: UserRepoDep,
    services: ServicesDep,
) -> UserService:
    return UserService(users, services.identity, services.admin_emails)


PostLifecycleDep = Annotated[PostLifecycleManager, Depends(get_post_lifecycle)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]


def get_page_params(
    page: Annotated[int, Query(description="Page number (1-based)")] = 1,
    limit: Annotated[int | None, Query(description="Page size (max 50)")] = None,
) -> PageParams:
    """
    Dependency normalizing ``page`` and ``limit``.

    Out-of-range values are clamped rather than rejected: ``page`` to
    1..MAX_PAGE and ``limit`` to 1..MAX_PAGE_SIZE.
    """
    return PageParams.clamp(page, limit)


PageParamsDep = Annotated[PageParams, Depends(get_page_params)]


@dataclass(frozen=True)
class PostListQuery:
    """
    Query container for post listing and filters.

    Parameters
    ----------
    params : PageParams
        Page and limit.
    status : str | None
        Status filter; unknown values are ignored.
    category : str | None
        Category id filter.
    author : str | None
        Author uid filter (ignored for authors, who only see their own).
    search : str | None
        Free-text filter over title, description and content.
    """

    params: PageParams
    status: str | None = None
    category: str | None = None
    author: str | None = None
    search: str | None = None


def get_post_list_query(
    params: PageParamsDep,
    status: Annotated[str | None, Query(description="Status filter")] = None,
    category: Annotated[str | None, Query(description="Category id filter")] = None,
    author: Annotated[str | None, Query(description="Author uid filter")] = None,
    search: Annotated[str | None, Query(description="Free-text search")] = None,
) -> PostListQuery:
    """Dependency to construct `PostListQuery` from query parameters."""
    return PostListQuery(
        params=params,
        status=status if status in PostStatus.__members__.values() else None,
        category=category or None,
        author=author or None,
        search=search or None,
    )


@dataclass(frozen=True)
class CategoryListQuery:
    """Query container for category listing and filters."""

    params: PageParams
    status: str | None = None
    featured: bool | None = None
    search: str | None = None
    sort: str | None = None


def get_category_list_query(
    params: PageParamsDep,
    status: Annotated[str | None, Query(description="active or inactive")] = None,
    featured: Annotated[bool | None, Query(description="Featured filter")] = None,
    search: Annotated[str | None, Query(description="Free-text search")] = None,
    sort: Annotated[
        str | None,
        Query(description="name, -name, posts, views or -created"),
    ] = None,
) -> CategoryListQuery:
    """Dependency to construct `CategoryListQuery` from query parameters."""
    return CategoryListQuery(
        params=params,
        status=status or None,
        featured=featured,
        search=search or None,
        sort=sort or None,
    )


@dataclass(frozen=True)
class UserListQuery:
    """Query container for user listing and filters."""

    params: PageParams
    role: str | None = None
    status: str | None = None
    search: str | None = None


def get_user_list_query(
    params: PageParamsDep,
    role: Annotated[str | None, Query(description="Role filter")] = None,
    status: Annotated[str | None, Query(description="active or inactive")] = None,
    search: Annotated[str | None, Query(description="Free-text search")] = None,
) -> UserListQuery:
    """Dependency to construct `UserListQuery` from query parameters."""
    return UserListQuery(
        params=params,
        role=role if role in Role.__members__.values() else None,
        status=status or None,
        search=search or None,
    )


PostListQueryDep = Annotated[PostListQuery, Depends(get_post_list_query)]
CategoryListQueryDep = Annotated[CategoryListQuery, Depends(get_category_list_query)]
UserListQueryDep = Annotated[UserListQuery, Depends(get_user_list_query)]
