# cms/routes/auth.py

"""
Auth Routes.

First sign-in provisioning: the admin frontend posts the identity
provider's ID token here after sign-in so a user record exists before any
other call.
"""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response

from cms.dependencies import IdentityDep, UserServiceDep
from cms.managers import limiter
from cms.routes.posts import RATE_LIMIT_429
from cms.schemas import EnsureUserRequest, EnsureUserResponse, UserResponse

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])


@router.post(
    "/ensure-user",
    response_class=ORJSONResponse,
    response_model=EnsureUserResponse,
    summary="Ensure a user record exists",
    description=(
        "Verify an ID token and create the caller's user record on first sign-in "
        "(admin for bootstrap admin emails, author otherwise); otherwise stamp last login."
    ),
    responses={
        400: {
            "description": "Token without email",
            "content": {"application/json": {"example": {"error": "Email not found in token"}}},
        },
        401: {
            "description": "Invalid token",
            "content": {"application/json": {"example": {"error": "Invalid or expired token"}}},
        },
        429: RATE_LIMIT_429,
    },
    operation_id="auth_ensure_user",
)
@limiter.limit("10/minute")
async def ensure_user(
    request: Request,
    response: Response,
    body: EnsureUserRequest,
    identity: IdentityDep,
    service: UserServiceDep,
) -> EnsureUserResponse:
    """
    Provision the caller's user record.

    Parameters
    ----------
    body : EnsureUserRequest
        ID token payload.
    identity : IdentityProvider
        Token verifier.
    service : UserService
        User service.

    Returns
    -------
    EnsureUserResponse
        The user record and whether it was just created.
    """
    claims = await identity.verify_id_token(body.id_token)
    db_user, created = await service.ensure_user(claims)
    return EnsureUserResponse(created=created, user=UserResponse.model_validate(db_user))
