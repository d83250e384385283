# cms/routes/users.py

"""
User Routes.

Admin user management plus self-service profile reads and edits. Users are
never hard-deleted: DELETE deactivates the account.
"""

from logging import getLogger

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from cms.auth import ActiveUserDep, UserCreateUserDep, UserDeactivateUserDep, UserListUserDep
from cms.configs import file_logger
from cms.dependencies import UserListQueryDep, UserRepoDep, UserServiceDep
from cms.managers import limiter
from cms.routes.posts import AUTH_401, FORBIDDEN_403, RATE_LIMIT_429
from cms.schemas import MessageResponse, Page, UserCreate, UserResponse, UserUpdate
from cms.services.pagination import to_page

router = APIRouter(prefix="/users", tags=["👤 Users"])

logger = file_logger(getLogger(__name__))

NOT_FOUND_404 = {
    "description": "Not found",
    "content": {"application/json": {"example": {"error": "User not found"}}},
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=Page[UserResponse],
    summary="List users",
    description="Paginated user listing (admin only). Filters: role, status, search.",
    responses={401: AUTH_401, 403: FORBIDDEN_403, 429: RATE_LIMIT_429},
    operation_id="users_list",
)
@limiter.limit("60/minute")
async def list_users(
    request: Request,
    response: Response,
    user: UserListUserDep,
    query: UserListQueryDep,
    repo: UserRepoDep,
) -> Page[UserResponse]:
    """List users, newest first."""
    rows, total = await repo.list_users(
        offset=query.params.offset,
        limit=query.params.limit,
        role=query.role,
        status=query.status,
        search=query.search,
    )
    return to_page(rows, total, query.params, UserResponse)


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a user",
    description="Provision an identity account and a user record with the role's permissions.",
    responses={
        400: {
            "description": "Missing fields, weak password or email in use",
            "content": {"application/json": {"example": {"error": "Email address is already in use"}}},
        },
        401: AUTH_401,
        403: FORBIDDEN_403,
        429: RATE_LIMIT_429,
    },
    operation_id="users_create",
)
@limiter.limit("10/minute")
async def create_user(
    request: Request,
    response: Response,
    user: UserCreateUserDep,
    new_user: UserCreate,
    service: UserServiceDep,
) -> UserResponse:
    """
    Create a user (admin only).

    Parameters
    ----------
    user : CurrentUser
        Admin caller.
    new_user : UserCreate
        User input payload.
    service : UserService
        User service.

    Returns
    -------
    UserResponse
        Created user data.
    """
    db_user = await service.create_user(new_user, user)
    return UserResponse.model_validate(db_user)


@router.get(
    "/{user_id}",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Get user by ID",
    description="Users may read their own profile; admins may read any.",
    responses={401: AUTH_401, 403: FORBIDDEN_403, 404: NOT_FOUND_404, 429: RATE_LIMIT_429},
    operation_id="users_get",
)
@limiter.limit("120/minute")
async def get_user(
    request: Request,
    response: Response,
    user_id: str,
    user: ActiveUserDep,
    service: UserServiceDep,
) -> UserResponse:
    """Get a user by ID."""
    db_user = await service.get(user_id, user)
    return UserResponse.model_validate(db_user)


@router.put(
    "/{user_id}",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Update a user",
    description="Users may edit their own profile fields; admins may also change role and active.",
    responses={401: AUTH_401, 403: FORBIDDEN_403, 404: NOT_FOUND_404, 429: RATE_LIMIT_429},
    operation_id="users_update",
)
@limiter.limit("30/minute")
async def update_user(
    request: Request,
    response: Response,
    user_id: str,
    user: ActiveUserDep,
    changes: UserUpdate,
    service: UserServiceDep,
) -> UserResponse:
    """
    Update a user.

    Parameters
    ----------
    user_id : str
        Target user uid.
    user : CurrentUser
        Active caller.
    changes : UserUpdate
        Fields to change.
    service : UserService
        User service.

    Returns
    -------
    UserResponse
        Updated user data.
    """
    db_user = await service.update_user(user_id, changes, user)
    return UserResponse.model_validate(db_user)


@router.delete(
    "/{user_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Deactivate a user",
    description="Deactivate a user account (admin only, not your own).",
    responses={401: AUTH_401, 403: FORBIDDEN_403, 404: NOT_FOUND_404, 429: RATE_LIMIT_429},
    operation_id="users_deactivate",
)
@limiter.limit("10/minute")
async def deactivate_user(
    request: Request,
    response: Response,
    user_id: str,
    user: UserDeactivateUserDep,
    service: UserServiceDep,
) -> MessageResponse:
    """Deactivate a user account."""
    db_user = await service.deactivate(user_id, user)
    return MessageResponse(message="User deactivated successfully", id=db_user.uid)
