"""Category referential integrity checks.

Parents are soft references, so existence, acyclicity and deletion guards
are enforced here before any category write.
"""

from logging import getLogger
from uuid import UUID

from cms.configs import file_logger
from cms.errors import ValidationError
from cms.repositories.category import CategoryRepository
from cms.repositories.post import PostRepository
from cms.utils.helpers import parse_uuid

logger = file_logger(getLogger(__name__))

PARENT_NOT_FOUND = "Parent category not found"
CIRCULAR_PARENT = "Cannot create circular category relationship"
HAS_POSTS = "Cannot delete category with existing posts. Please move or delete posts first."
HAS_CHILDREN = (
    "Cannot delete category with child categories. "
    "Please reassign or delete child categories first."
)


class CategoryIntegrityChecker:
    """Validates parent links and deletion of categories."""

    def __init__(self, categories: CategoryRepository, posts: PostRepository) -> None:
        self.categories = categories
        self.posts = posts

    async def check_parent(
        self,
        parent_id: str | UUID,
        category_id: UUID | None = None,
    ) -> UUID:
        """
        Validate a proposed parent for a category.

        Walks from the parent up to the root. The category being edited must
        not appear anywhere on that chain, which rejects self parents,
        mutual parents and longer loops alike.

        Args:
            parent_id: Proposed parent id
            category_id: Category being edited, None on create

        Returns:
            UUID: The parsed parent id

        Raises:
            ValidationError: If the parent is missing or the link would
                close a cycle
        """
        parent = parse_uuid(parent_id)
        if parent is None:
            raise ValidationError(PARENT_NOT_FOUND)

        if category_id is not None and parent == category_id:
            raise ValidationError(CIRCULAR_PARENT)

        exists, ancestor = await self.categories.get_parent_id(parent)
        if not exists:
            raise ValidationError(PARENT_NOT_FOUND)

        if category_id is None:
            return parent

        visited = {parent}
        while ancestor is not None:
            if ancestor == category_id:
                raise ValidationError(CIRCULAR_PARENT)
            if ancestor in visited:
                logger.warning(f"Existing category loop detected at {ancestor}")
                break
            visited.add(ancestor)
            _, ancestor = await self.categories.get_parent_id(ancestor)

        return parent

    async def check_deletable(self, category_id: UUID) -> None:
        """
        Ensure nothing references a category before it is deleted.

        Raises:
            ValidationError: If a post or child category references it
        """
        if await self.posts.any_in_category(category_id):
            raise ValidationError(HAS_POSTS)
        if await self.categories.has_children(category_id):
            raise ValidationError(HAS_CHILDREN)
