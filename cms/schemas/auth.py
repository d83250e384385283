"""Authentication schemas."""

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field

from cms.rbac.permissions import Role
from cms.schemas.user import UserResponse


@dataclass(frozen=True, slots=True)
class CurrentUser:
    """
    Authenticated caller resolved from the bearer token and user record.

    Attributes:
        uid: Subject identifier
        email: Email from the token, falling back to the stored email
        role: Resolved role (author when unset)
        permissions: Capabilities stamped on the user record
        active: Whether the account may act
    """

    uid: str
    email: str | None
    role: Role
    permissions: tuple[str, ...] = field(default_factory=tuple)
    active: bool = True


class EnsureUserRequest(BaseModel):
    """First sign-in provisioning request."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id_token: str = Field(..., alias="idToken", min_length=1, description="Identity ID token")


class EnsureUserResponse(BaseModel):
    """Result of first sign-in provisioning."""

    model_config = ConfigDict(populate_by_name=True)

    created: bool = Field(..., description="Whether a user record was created")
    user: UserResponse
