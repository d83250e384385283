"""
Post schemas.

Request bodies accept camelCase keys (snake_case also works) and responses
are serialized with camelCase keys.
"""

from datetime import datetime
from enum import StrEnum
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cms.schemas.common import ResponseModel, require_text
from cms.utils.helpers import unique_ordered


class PostStatus(StrEnum):
    """Publication status of a post."""

    DRAFT = "draft"
    PUBLISHED = "published"
    SCHEDULED = "scheduled"
    ARCHIVED = "archived"


class FeaturedImage(BaseModel):
    """Image shown with a post in listings."""

    url: str = Field(..., description="Image URL", examples=["https://example.com/bali.jpg"])
    alt: str = Field(default="", description="Alternative text")


class PostCreate(BaseModel):
    """Post creation model (request body)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(..., max_length=200, description="Post title", examples=["Bali on a Budget"])
    description: str = Field(..., max_length=1000, description="Short description")
    content: str = Field(..., description="Post body")
    category_id: str = Field(..., alias="categoryId", description="Category ID")
    excerpt: str | None = Field(default=None, max_length=1000, description="Listing excerpt")
    status: Literal["draft", "published", "scheduled"] = Field(
        default="draft",
        description="Initial status",
    )
    scheduled_for: datetime | None = Field(
        default=None,
        alias="scheduledFor",
        description="Planned publication time (used only when scheduled)",
    )
    tags: list[str] = Field(default_factory=list, description="Tags")
    featured: bool = Field(default=False, description="Featured flag")
    featured_image: FeaturedImage | None = Field(
        default=None,
        alias="featuredImage",
        description="Featured image",
    )
    seo: dict[str, Any] | None = Field(default=None, description="SEO metadata")

    @field_validator("title", "description", "content", "category_id")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        return require_text(value)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, value: list[str]) -> list[str]:
        return unique_ordered(value)


class PostUpdate(BaseModel):
    """
    Post update model (request body).

    Only fields present in the body are applied; ``scheduledFor`` is ignored
    unless the resulting status is ``scheduled``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str | None = Field(default=None, max_length=200, description="Post title")
    description: str | None = Field(default=None, max_length=1000, description="Description")
    content: str | None = Field(default=None, description="Post body")
    category_id: str | None = Field(default=None, alias="categoryId", description="Category ID")
    excerpt: str | None = Field(default=None, max_length=1000, description="Listing excerpt")
    status: PostStatus | None = Field(default=None, description="New status")
    scheduled_for: datetime | None = Field(
        default=None,
        alias="scheduledFor",
        description="Planned publication time",
    )
    tags: list[str] | None = Field(default=None, description="Tags")
    featured: bool | None = Field(default=None, description="Featured flag")
    featured_image: FeaturedImage | None = Field(
        default=None,
        alias="featuredImage",
        description="Featured image",
    )
    seo: dict[str, Any] | None = Field(default=None, description="SEO metadata")
    moderation_notes: str | None = Field(
        default=None,
        alias="moderationNotes",
        max_length=1000,
        description="Moderator notes",
    )

    @field_validator("title", "description", "content", "category_id")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        return require_text(value)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, value: list[str] | None) -> list[str] | None:
        return unique_ordered(value) if value is not None else None


class PostResponse(ResponseModel):
    """Post as returned by the API."""

    id: UUID
    title: str
    slug: str
    description: str
    content: str
    excerpt: str
    status: PostStatus
    publish_date: datetime | None = Field(default=None, alias="publishDate")
    scheduled_for: datetime | None = Field(default=None, alias="scheduledFor")
    author_id: str = Field(..., alias="authorId")
    category_id: UUID = Field(..., alias="categoryId")
    tags: list[str]
    featured: bool
    featured_image: dict[str, Any] | None = Field(default=None, alias="featuredImage")
    reading_time: int = Field(..., alias="readingTime")
    views: int
    likes: int
    shares: int
    seo: dict[str, Any]
    moderation_status: str = Field(..., alias="moderationStatus")
    moderation_notes: str | None = Field(default=None, alias="moderationNotes")
    last_modified_by: str | None = Field(default=None, alias="lastModifiedBy")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "Bali on a Budget",
                "slug": "bali-on-a-budget",
                "status": "draft",
                "authorId": "Xb3kPq9sTzW1",
                "categoryId": "123e4567-e89b-12d3-a456-426614174000",
                "readingTime": 4,
                "moderationStatus": "approved",
            },
        },
    )
