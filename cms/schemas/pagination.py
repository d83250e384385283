"""Pagination envelope schemas."""

from pydantic import BaseModel, ConfigDict, Field


class PaginationMeta(BaseModel):
    """Navigation block returned with every list."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(..., ge=1, description="Current page (1-based)")
    limit: int = Field(..., ge=1, description="Page size")
    total: int = Field(..., ge=0, description="Total matching records")
    pages: int = Field(..., ge=0, description="Total pages")
    has_next: bool = Field(..., alias="hasNext", description="A later page exists")
    has_prev: bool = Field(..., alias="hasPrev", description="An earlier page exists")


class Page[ItemT: BaseModel](BaseModel):
    """A page of items plus its navigation block."""

    items: list[ItemT]
    pagination: PaginationMeta
