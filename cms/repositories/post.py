"""Post repository for database operations."""

from logging import getLogger
from uuid import UUID

from sqlalchemy import ColumnElement, desc, false, or_, select

from cms.configs import file_logger
from cms.models.post import PostDB
from cms.repositories.base import BaseRepository
from cms.utils.helpers import parse_uuid

logger = file_logger(getLogger(__name__))


class PostRepository(BaseRepository[PostDB]):
    """
    Repository for Post database operations.

    Derived fields and counters are handled by the lifecycle and counter
    services; this class only reads and writes rows.
    """

    model = PostDB
    not_found_detail = "Post not found"
    conflict_detail = "A post with this title already exists. Please choose a different title."

    async def any_in_category(self, category_id: UUID) -> bool:
        """Check whether at least one post references a category."""
        statement = select(1).where(PostDB.category_id == category_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None

    async def list_posts(
        self,
        *,
        offset: int,
        limit: int,
        status: str | None = None,
        category: str | None = None,
        author: str | None = None,
        search: str | None = None,
    ) -> tuple[list[PostDB], int]:
        """
        List posts with filters, newest update first.

        Args:
            offset: Rows to skip
            limit: Maximum rows to return
            status: Only posts with this status
            category: Only posts in this category id
            author: Only posts by this author uid
            search: Case-insensitive match on title, description or content

        Returns:
            tuple[list[PostDB], int]: Page items and total count
        """
        conditions: list[ColumnElement[bool]] = []

        if status:
            conditions.append(PostDB.status == status)

        if category:
            category_id = parse_uuid(category)
            conditions.append(PostDB.category_id == category_id if category_id else false())

        if author:
            conditions.append(PostDB.author_id == author)

        if search:
            term = search.strip()
            conditions.append(
                or_(
                    PostDB.title.icontains(term, autoescape=True),
                    PostDB.description.icontains(term, autoescape=True),
                    PostDB.content.icontains(term, autoescape=True),
                ),
            )

        logger.debug(f"Listing posts with {len(conditions)} filters at offset {offset}")

        return await self.list_page(
            conditions,
            order_by=(desc(PostDB.updated_at), desc(PostDB.created_at)),
            offset=offset,
            limit=limit,
        )
