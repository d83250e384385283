"""Category repository for database operations."""

from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement, asc, desc, or_, select

from cms.models.category import CategoryDB
from cms.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[CategoryDB]):
    """Repository for Category database operations."""

    model = CategoryDB
    not_found_detail = "Category not found"
    conflict_detail = "A category with this name already exists. Please choose a different name."

    # Sort keys accepted by the list endpoint
    SORTS: dict[str, tuple[Any, ...]] = {
        "name": (asc(CategoryDB.name),),
        "-name": (desc(CategoryDB.name),),
        "posts": (desc(CategoryDB.post_count), asc(CategoryDB.name)),
        "views": (desc(CategoryDB.total_views), asc(CategoryDB.name)),
        "-created": (desc(CategoryDB.created_at),),
    }
    DEFAULT_SORT: tuple[Any, ...] = (asc(CategoryDB.sort_order), asc(CategoryDB.name))

    async def get_parent_id(self, category_id: UUID) -> tuple[bool, UUID | None]:
        """
        Look up a category's parent without loading the full row.

        Returns:
            tuple[bool, UUID | None]: Whether the category exists, and its parent id
        """
        statement = select(CategoryDB.parent_id).where(CategoryDB.id == category_id)
        result = await self.session.execute(statement)
        row = result.first()
        if row is None:
            return False, None
        return True, row[0]

    async def has_children(self, category_id: UUID) -> bool:
        """Check whether any category names this one as parent."""
        statement = select(1).where(CategoryDB.parent_id == category_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None

    async def adjust_post_count(self, category_id: UUID, delta: int) -> None:
        """Atomically shift a category's post count and stamp its update time."""
        await self._increment(category_id, touch=True, post_count=delta)

    async def list_categories(
        self,
        *,
        offset: int,
        limit: int,
        status: str | None = None,
        featured: bool | None = None,
        search: str | None = None,
        sort: str | None = None,
    ) -> tuple[list[CategoryDB], int]:
        """
        List categories with filters.

        Args:
            offset: Rows to skip
            limit: Maximum rows to return
            status: ``active`` or ``inactive``
            featured: Only featured (or non-featured) categories
            search: Case-insensitive match on name or description
            sort: One of ``SORTS``; defaults to manual sort order

        Returns:
            tuple[list[CategoryDB], int]: Page items and total count
        """
        conditions: list[ColumnElement[bool]] = []

        if status == "active":
            conditions.append(CategoryDB.active.is_(True))
        elif status == "inactive":
            conditions.append(CategoryDB.active.is_(False))

        if featured is not None:
            conditions.append(CategoryDB.featured.is_(featured))

        if search:
            term = search.strip()
            conditions.append(
                or_(
                    CategoryDB.name.icontains(term, autoescape=True),
                    CategoryDB.description.icontains(term, autoescape=True),
                ),
            )

        order_by = self.SORTS.get(sort or "", self.DEFAULT_SORT)
        return await self.list_page(conditions, order_by=order_by, offset=offset, limit=limit)
