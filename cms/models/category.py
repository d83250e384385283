"""Category database model using SQLModel."""

from datetime import UTC, datetime
from typing import Any, cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, Boolean, DateTime, Integer, Uuid
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class CategoryDB(SQLModel, table=True):
    """
    Category database model.

    ``parent_id`` is a soft self reference: existence and acyclicity are
    enforced by the category integrity service, not by a foreign key.
    """

    __tablename__ = cast("declared_attr[str]", "categories")

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Category ID",
    )

    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Category name",
    )
    slug: str = Field(
        sa_column=Column(String(120), unique=True, nullable=False, index=True),
        description="URL-friendly slug (unique)",
    )
    description: str = Field(
        default="",
        sa_column=Column(String(1000), nullable=False, server_default=""),
        description="Category description",
    )
    color: str = Field(
        default="#3B82F6",
        sa_column=Column(String(7), nullable=False, server_default="#3B82F6"),
        description="Hex colour (#RRGGBB)",
    )
    icon: str | None = Field(
        default=None,
        sa_column=Column(String(50)),
        description="Display icon",
    )
    featured_image: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Featured image URL",
    )
    parent_id: UUID | None = Field(
        default=None,
        sa_column=Column(Uuid, nullable=True, index=True),
        description="Parent category ID",
    )

    featured: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default="0"),
        description="Featured flag",
    )
    active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, server_default="1"),
        description="Active flag",
    )
    sort_order: int = Field(
        default=999,
        sa_column=Column(Integer, nullable=False, server_default="999"),
        description="Manual sort position",
    )

    # Counters
    post_count: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0"),
        description="Number of posts in this category",
    )
    total_views: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, server_default="0"),
        description="Total views across the category's posts",
    )

    seo: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
        description="SEO metadata",
    )
    hero: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
        description="Hero banner content",
    )

    created_by: str | None = Field(
        default=None,
        sa_column=Column(String(128)),
        description="uid of the creator",
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
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "name": "Travel Tips",
                "slug": "travel-tips",
                "color": "#3B82F6",
                "icon": "📁",
                "sort_order": 999,
            },
        },
    )
