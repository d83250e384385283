"""User database model using SQLModel."""

from datetime import UTC, datetime
from typing import Any, cast

from pydantic import ConfigDict
from sqlalchemy import JSON, Boolean, DateTime, Integer
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class UserDB(SQLModel, table=True):
    """
    User database model.

    Rows are keyed by the identity provider's subject id. The permission
    list is stamped from the role when the user is created or when an admin
    changes the role; it is never re-derived on read.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    # Primary key (identity provider subject id)
    uid: str = Field(
        sa_column=Column(String(128), primary_key=True, nullable=False),
        description="Subject identifier from the identity provider",
    )

    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique)",
    )
    display_name: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Display name",
    )
    role: str = Field(
        default="author",
        sa_column=Column(String(20), nullable=False, index=True, server_default="author"),
        description="Role (admin, editor, author)",
    )
    permissions: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Capabilities stamped from the role",
    )
    active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, server_default="1"),
        description="Whether the account may act",
    )

    # Profile
    bio: str = Field(
        default="",
        sa_column=Column(String(1000), nullable=False, server_default=""),
        description="Short biography",
    )
    avatar: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Avatar URL",
    )
    expertise: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Areas of expertise",
    )
    social: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
        description="Social profile links",
    )

    # Counters
    posts_count: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0"),
        description="Number of posts authored",
    )
    drafts_count: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0"),
        description="Number of posts in draft status",
    )
    total_views: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0"),
        description="Total views across the user's posts",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )
    join_date: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Date the user joined",
    )
    last_login: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last sign-in timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "uid": "Xb3kPq9sTzW1",
                "email": "jane.doe@example.com",
                "display_name": "jane doe",
                "role": "author",
                "permissions": ["posts.create", "posts.edit.own"],
                "active": True,
            },
        },
    )
