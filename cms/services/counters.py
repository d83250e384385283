"""Cross-entity counter maintenance.

Every adjustment is a single ``UPDATE ... SET x = x + n`` statement issued
on the request's session, so counters commit or roll back together with
the post write that caused them.
"""

from uuid import UUID

from cms.models.post import PostDB
from cms.repositories.category import CategoryRepository
from cms.repositories.user import UserRepository
from cms.schemas.post import PostStatus


def _is_draft(status: str) -> bool:
    return status == PostStatus.DRAFT


class CounterMaintainer:
    """Keeps category and author counters in step with post writes."""

    def __init__(self, categories: CategoryRepository, users: UserRepository) -> None:
        self.categories = categories
        self.users = users

    async def post_created(self, post: PostDB) -> None:
        await self.categories.adjust_post_count(post.category_id, 1)
        await self.users.adjust_post_counts(
            post.author_id,
            posts=1,
            drafts=1 if _is_draft(post.status) else 0,
        )

    async def post_deleted(self, post: PostDB) -> None:
        await self.categories.adjust_post_count(post.category_id, -1)
        await self.users.adjust_post_counts(
            post.author_id,
            posts=-1,
            drafts=-1 if _is_draft(post.status) else 0,
        )

    async def post_updated(
        self,
        post: PostDB,
        previous_category_id: UUID,
        previous_status: str,
    ) -> None:
        """
        Apply counter changes implied by an update.

        Moving categories shifts one unit of ``post_count``; entering or
        leaving ``draft`` shifts the author's ``drafts_count``.
        """
        if post.category_id != previous_category_id:
            await self.categories.adjust_post_count(previous_category_id, -1)
            await self.categories.adjust_post_count(post.category_id, 1)

        was_draft, is_draft = _is_draft(previous_status), _is_draft(post.status)
        if was_draft != is_draft:
            await self.users.adjust_post_counts(post.author_id, drafts=1 if is_draft else -1)
