"""Category schemas."""

import re
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from cms.configs.settings import DEFAULT_CATEGORY_COLOR, DEFAULT_CATEGORY_ICON, DEFAULT_SORT_ORDER
from cms.schemas.common import ResponseModel, require_text

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def validate_color(value: str | None) -> str | None:
    if value is not None and not HEX_COLOR.match(value):
        raise PydanticCustomError(
            "invalid_color",
            "Invalid color format. Please use hex format (e.g., #FF0000)",
        )
    return value


class CategoryCreate(BaseModel):
    """Category creation model (request body)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., max_length=100, description="Category name", examples=["Travel Tips"])
    description: str = Field(default="", max_length=1000, description="Category description")
    color: str = Field(default=DEFAULT_CATEGORY_COLOR, description="Hex colour (#RRGGBB)")
    icon: str | None = Field(default=DEFAULT_CATEGORY_ICON, max_length=50, description="Icon")
    featured_image: str | None = Field(
        default=None,
        alias="featuredImage",
        max_length=500,
        description="Featured image URL",
    )
    parent_id: str | None = Field(default=None, alias="parentId", description="Parent category")
    featured: bool = Field(default=False, description="Featured flag")
    active: bool = Field(default=True, description="Active flag")
    sort_order: int = Field(default=DEFAULT_SORT_ORDER, alias="sortOrder", description="Position")
    seo: dict[str, Any] | None = Field(default=None, description="SEO metadata")
    hero: dict[str, Any] | None = Field(default=None, description="Hero banner content")

    @field_validator("name")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        return require_text(value)

    @field_validator("color")
    @classmethod
    def hex_color(cls, value: str | None) -> str | None:
        return validate_color(value)


class CategoryUpdate(BaseModel):
    """
    Category update model (request body).

    Only fields present in the body are applied. An explicit
    ``"parentId": null`` detaches the category from its parent.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str | None = Field(default=None, max_length=100, description="Category name")
    description: str | None = Field(default=None, max_length=1000, description="Description")
    color: str | None = Field(default=None, description="Hex colour (#RRGGBB)")
    icon: str | None = Field(default=None, max_length=50, description="Icon")
    featured_image: str | None = Field(
        default=None,
        alias="featuredImage",
        max_length=500,
        description="Featured image URL",
    )
    parent_id: str | None = Field(default=None, alias="parentId", description="Parent category")
    featured: bool | None = Field(default=None, description="Featured flag")
    active: bool | None = Field(default=None, description="Active flag")
    sort_order: int | None = Field(default=None, alias="sortOrder", description="Position")
    seo: dict[str, Any] | None = Field(default=None, description="SEO metadata")
    hero: dict[str, Any] | None = Field(default=None, description="Hero banner content")

    @field_validator("name")
    @classmethod
    def not_blank(cls, value: str | None) -> str | None:
        return require_text(value)

    @field_validator("color")
    @classmethod
    def hex_color(cls, value: str | None) -> str | None:
        return validate_color(value)


class CategoryResponse(ResponseModel):
    """Category as returned by the API."""

    id: UUID
    name: str
    slug: str
    description: str
    color: str
    icon: str | None = None
    featured_image: str | None = Field(default=None, alias="featuredImage")
    parent_id: UUID | None = Field(default=None, alias="parentId")
    featured: bool
    active: bool
    sort_order: int = Field(..., alias="sortOrder")
    post_count: int = Field(..., alias="postCount")
    total_views: int = Field(..., alias="totalViews")
    seo: dict[str, Any]
    hero: dict[str, Any]
    created_by: str | None = Field(default=None, alias="createdBy")
    last_modified_by: str | None = Field(default=None, alias="lastModifiedBy")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")
