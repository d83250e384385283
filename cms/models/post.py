"""Post database model using SQLModel."""

from datetime import UTC, datetime
from typing import Any, cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, Text, Uuid
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class PostDB(SQLModel, table=True):
    """
    Post database model.

    ``author_id`` and ``category_id`` are plain columns; author and category
    counters are kept in step by the counter service rather than by foreign
    keys.
    """

    __tablename__ = cast("declared_attr[str]", "posts")

    __table_args__ = (
        Index("ix_posts_status_updated", "status", "updated_at"),
        Index("ix_posts_author_status", "author_id", "status"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Post ID",
    )

    title: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Post title",
    )
    slug: str = Field(
        sa_column=Column(String(220), unique=True, nullable=False, index=True),
        description="URL-friendly slug (unique)",
    )
    description: str = Field(
        sa_column=Column(String(1000), nullable=False),
        description="Short description",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Post body",
    )
    excerpt: str = Field(
        default="",
        sa_column=Column(String(1000), nullable=False, server_default=""),
        description="Listing excerpt",
    )
    excerpt_explicit: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default="0"),
        description="Whether the excerpt was supplied rather than derived",
    )

    status: str = Field(
        default="draft",
        sa_column=Column(String(20), nullable=False, index=True),
        description="Post status (draft, published, scheduled, archived)",
    )
    publish_date: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Set when the post enters published",
    )
    scheduled_for: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Planned publication time while scheduled",
    )

    author_id: str = Field(
        sa_column=Column(String(128), nullable=False, index=True),
        description="uid of the author",
    )
    category_id: UUID = Field(
        sa_column=Column(Uuid, nullable=False, index=True),
        description="Category ID",
    )

    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Tags (de-duplicated)",
    )
    featured: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default="0"),
        description="Featured flag",
    )
    featured_image: dict[str, Any] | None = Field(
        default=None,
        sa_column=Column(JSON),
        description="Featured image ({url, alt})",
    )

    reading_time: int = Field(
        default=1,
        sa_column=Column(Integer, nullable=False, server_default="1"),
        description="Estimated reading time in minutes",
    )
    views: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0"),
        description="View count",
    )
    likes: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0"),
        description="Like count",
    )
    shares: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0"),
        description="Share count",
    )

    seo: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
        description="SEO metadata",
    )
    moderation_status: str = Field(
        default="approved",
        sa_column=Column(String(20), nullable=False, server_default="approved"),
        description="Moderation status",
    )
    moderation_notes: str | None = Field(
        default=None,
        sa_column=Column(String(1000)),
        description="Moderator notes",
    )
    last_modified_by: str | None = Field(
        default=None,
        sa_column=Column(String(128)),
        description="uid of the last editor",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "Getting Started With Async Python",
                "slug": "getting-started-with-async-python",
                "status": "draft",
                "author_id": "Xb3kPq9sTzW1",
                "category_id": "123e4567-e89b-12d3-a456-426614174000",
                "tags": ["python", "asyncio"],
                "reading_time": 4,
            },
        },
    )
