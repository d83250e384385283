"""Pagination parameters and envelope construction."""

from collections.abc import Iterable
from dataclasses import dataclass
from math import ceil

from pydantic import BaseModel

from cms.configs import settings
from cms.schemas.pagination import Page, PaginationMeta


@dataclass(frozen=True, slots=True)
class PageParams:
    """
    Normalized page request.

    Attributes:
        page: 1-based page number
        limit: Page size
    """

    page: int = 1
    limit: int = settings.DEFAULT_PAGE_SIZE

    @classmethod
    def clamp(
        cls,
        page: int | None,
        limit: int | None,
        max_limit: int = settings.MAX_PAGE_SIZE,
        default_limit: int = settings.DEFAULT_PAGE_SIZE,
        max_page: int = settings.MAX_PAGE,
    ) -> "PageParams":
        """Clamp raw query values: page to 1..max_page, limit to 1..max_limit."""
        page = min(max(page or 1, 1), max_page)
        limit = default_limit if limit is None else limit
        return cls(page=page, limit=min(max(limit, 1), max_limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def build_pagination(page: int, limit: int, total: int) -> PaginationMeta:
    """
    Build the navigation block for a page.

    Args:
        page: Current page (1-based)
        limit: Page size
        total: Total matching records

    Returns:
        PaginationMeta: ``pages = ceil(total / limit)`` with next/prev flags
    """
    pages = ceil(total / limit) if limit else 0
    return PaginationMeta(
        page=page,
        limit=limit,
        total=total,
        pages=pages,
        has_next=page < pages,
        has_prev=page > 1,
    )


def to_page[ItemT: BaseModel](
    rows: Iterable[object],
    total: int,
    params: PageParams,
    schema: type[ItemT],
) -> Page[ItemT]:
    """Validate rows into response items and wrap them with their navigation block."""
    return Page[schema](
        items=[schema.model_validate(row) for row in rows],
        pagination=build_pagination(params.page, params.limit, total),
    )
