"""
User schemas.

Admin creation provisions an identity account first, so the password only
ever travels to the identity provider and is never stored here.
"""

from datetime import datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr, field_validator
from pydantic_core import PydanticCustomError

from cms.configs.settings import MIN_PASSWORD_LENGTH
from cms.rbac.permissions import Role
from cms.schemas.common import ResponseModel, require_text


class UserCreate(BaseModel):
    """User creation model (admin request body)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    email: EmailStr = Field(..., description="Email address", examples=["jane.doe@example.com"])
    display_name: str = Field(
        ...,
        alias="displayName",
        max_length=200,
        description="Display name",
        examples=["Jane Doe"],
    )
    role: Role = Field(..., description="Role", examples=["author"])
    password: SecretStr = Field(..., description="Initial password", examples=["s3cret!"])
    bio: str = Field(default="", max_length=1000, description="Short biography")
    avatar: str | None = Field(default=None, max_length=500, description="Avatar URL")
    expertise: list[str] = Field(default_factory=list, description="Areas of expertise")
    social: dict[str, Any] = Field(default_factory=dict, description="Social profile links")

    @field_validator("display_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return require_text(value)

    @field_validator("password")
    @classmethod
    def password_length(cls, value: SecretStr) -> SecretStr:
        if len(value.get_secret_value()) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                "password_too_short",
                "Password must be at least {min_length} characters",
                {"min_length": MIN_PASSWORD_LENGTH},
            )
        return value


class UserUpdate(BaseModel):
    """
    User update model (request body).

    ``role`` and ``active`` are admin-only; the profile fields may also be
    edited by the user themselves.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    display_name: str | None = Field(
        default=None,
        alias="displayName",
        max_length=200,
        description="Display name",
    )
    bio: str | None = Field(default=None, max_length=1000, description="Short biography")
    avatar: str | None = Field(default=None, max_length=500, description="Avatar URL")
    expertise: list[str] | None = Field(default=None, description="Areas of expertise")
    social: dict[str, Any] | None = Field(default=None, description="Social profile links")
    role: Role | None = Field(default=None, description="Role (admin only)")
    active: bool | None = Field(default=None, description="Active flag (admin only)")

    ADMIN_FIELDS: ClassVar[frozenset[str]] = frozenset({"role", "active"})

    @field_validator("display_name")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        return require_text(value)


class UserResponse(ResponseModel):
    """User as returned by the API."""

    uid: str
    email: str
    display_name: str = Field(..., alias="displayName")
    role: Role
    permissions: list[str]
    active: bool
    bio: str
    avatar: str | None = None
    expertise: list[str]
    social: dict[str, Any]
    posts_count: int = Field(..., alias="postsCount")
    drafts_count: int = Field(..., alias="draftsCount")
    total_views: int = Field(..., alias="totalViews")
    join_date: datetime = Field(..., alias="joinDate")
    last_login: datetime | None = Field(default=None, alias="lastLogin")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
