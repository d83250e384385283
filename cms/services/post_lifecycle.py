"""Post lifecycle management.

Assembles post records with their derived fields, applies status
transitions and keeps counters in step, all on the caller's session.
"""

from logging import getLogger
from math import ceil
from typing import Any
from uuid import UUID

from cms.configs import file_logger
from cms.configs.settings import EXCERPT_LENGTH, WORDS_PER_MINUTE
from cms.errors import AuthorizationError, ValidationError
from cms.models.post import PostDB
from cms.rbac.permissions import Permission, can_access_resource
from cms.repositories.category import CategoryRepository
from cms.repositories.post import PostRepository
from cms.schemas.auth import CurrentUser
from cms.schemas.post import PostCreate, PostStatus, PostUpdate
from cms.services.counters import CounterMaintainer
from cms.services.slug import ensure_unique, generate_slug
from cms.utils.helpers import parse_uuid, utcnow

logger = file_logger(getLogger(__name__))

CATEGORY_NOT_FOUND = "Category not found"
ACCESS_DENIED = "Access denied"


def calculate_word_count(content: str) -> int:
    """
    Calculate word count from content.

    Args:
        content: Post body

    Returns:
        int: Number of whitespace separated words
    """
    return len(content.split())


def calculate_reading_time(content: str) -> int:
    """
    Estimate reading time in minutes at 200 words per minute, rounded up.

    Args:
        content: Post body

    Returns:
        int: Reading time (200 words -> 1, 201 words -> 2)
    """
    return ceil(calculate_word_count(content) / WORDS_PER_MINUTE)


def derive_excerpt(description: str, excerpt: str | None = None) -> str:
    """Use the explicit excerpt, else the start of the description."""
    return excerpt or description[:EXCERPT_LENGTH]


def default_seo(
    title: str,
    description: str,
    featured_image: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "metaTitle": title,
        "metaDescription": description,
        "keywords": [],
        "ogImage": (featured_image or {}).get("url", ""),
        "canonicalUrl": "",
    }


def ensure_can_access(post: PostDB, user: CurrentUser) -> None:
    """
    Check the caller's stamped capabilities against a post.

    Admins pass outright, holders of ``posts.edit`` may act on any post and
    holders of ``posts.edit.own`` only on posts they wrote.

    Raises:
        AuthorizationError: If the caller's grants do not cover the post
    """
    allowed = can_access_resource(
        user.role,
        user.permissions,
        Permission.POSTS_EDIT,
        owner_id=post.author_id,
        user_id=user.uid,
    )
    if not allowed:
        raise AuthorizationError(ACCESS_DENIED)


class PostLifecycleManager:
    """
    Creates, updates and deletes posts with their derived state.

    Args:
        posts: Post repository
        categories: Category repository
        counters: Counter maintainer bound to the same session
    """

    def __init__(
        self,
        posts: PostRepository,
        categories: CategoryRepository,
        counters: CounterMaintainer,
    ) -> None:
        self.posts = posts
        self.categories = categories
        self.counters = counters

    async def _resolve_category(self, category_id: str) -> UUID:
        parsed = parse_uuid(category_id)
        if parsed is None or not await self.categories.exists(parsed):
            raise ValidationError(CATEGORY_NOT_FOUND)
        return parsed

    async def get(self, post_id: str, user: CurrentUser) -> PostDB:
        """Fetch a post the caller may see."""
        post = await self.posts.get_or_raise(parse_uuid(post_id))
        ensure_can_access(post, user)
        return post

    async def create(self, data: PostCreate, author: CurrentUser) -> PostDB:
        """
        Create a post authored by the caller.

        Args:
            data: Validated request body
            author: Authenticated caller

        Returns:
            PostDB: The persisted post

        Raises:
            ValidationError: If the slug is empty or the category is missing
            ConflictError: If another post holds the slug
        """
        slug = generate_slug(data.title)
        await ensure_unique(self.posts, slug)
        category_id = await self._resolve_category(data.category_id)

        now = utcnow()
        status = PostStatus(data.status)
        featured_image = data.featured_image.model_dump() if data.featured_image else None

        post = PostDB(
            title=data.title,
            slug=slug,
            description=data.description,
            content=data.content,
            excerpt=derive_excerpt(data.description, data.excerpt),
            excerpt_explicit=bool(data.excerpt),
            status=status,
            publish_date=now if status is PostStatus.PUBLISHED else None,
            scheduled_for=data.scheduled_for if status is PostStatus.SCHEDULED else None,
            author_id=author.uid,
            category_id=category_id,
            tags=list(data.tags),
            featured=data.featured,
            featured_image=featured_image,
            reading_time=calculate_reading_time(data.content),
            views=0,
            likes=0,
            shares=0,
            seo=data.seo or default_seo(data.title, data.description, featured_image),
            moderation_status="approved",
            last_modified_by=author.uid,
            created_at=now,
            updated_at=now,
        )
        post = await self.posts.add(post)
        await self.counters.post_created(post)

        logger.info(f"Post {post.id} created by {author.uid} with status {status}")
        return post

    async def update(self, post_id: str, data: PostUpdate, editor: CurrentUser) -> PostDB:
        """
        Apply a partial update to a post.

        The slug is recomputed only when the title changes and reading time
        only when the content changes. Entering ``published`` stamps the
        publish date; ``scheduledFor`` is kept only while ``scheduled``.

        Args:
            post_id: Post id from the path
            data: Validated request body; unset fields are left untouched
            editor: Authenticated caller

        Returns:
            PostDB: The updated post

        Raises:
            NotFoundError: If the post does not exist
            AuthorizationError: If an author edits someone else's post
            ValidationError: If a new category does not exist
            ConflictError: If the new title's slug is taken
        """
        post = await self.get(post_id, editor)
        changes = data.model_dump(exclude_unset=True)

        previous_category_id = post.category_id
        previous_status = post.status

        if "title" in changes and data.title is not None and data.title != post.title:
            slug = generate_slug(data.title)
            await ensure_unique(self.posts, slug, exclude_id=post.id)
            post.title = data.title
            post.slug = slug

        if "description" in changes and data.description is not None:
            post.description = data.description

        if "excerpt" in changes:
            post.excerpt_explicit = bool(data.excerpt)
            post.excerpt = derive_excerpt(post.description, data.excerpt)
        elif not post.excerpt_explicit:
            post.excerpt = derive_excerpt(post.description)

        if "content" in changes and data.content is not None and data.content != post.content:
            post.content = data.content
            post.reading_time = calculate_reading_time(data.content)

        if "category_id" in changes and data.category_id is not None:
            post.category_id = await self._resolve_category(data.category_id)

        if "tags" in changes:
            post.tags = list(data.tags or [])
        if "featured" in changes and data.featured is not None:
            post.featured = data.featured
        if "featured_image" in changes:
            post.featured_image = data.featured_image.model_dump() if data.featured_image else None
        if "seo" in changes and data.seo is not None:
            post.seo = data.seo
        if "moderation_notes" in changes:
            post.moderation_notes = data.moderation_notes

        self._apply_status(post, data, changes)

        post.last_modified_by = editor.uid
        post.updated_at = utcnow()
        post = await self.posts.save(post)
        await self.counters.post_updated(post, previous_category_id, previous_status)

        logger.info(f"Post {post.id} updated by {editor.uid}")
        return post

    @staticmethod
    def _apply_status(post: PostDB, data: PostUpdate, changes: dict[str, Any]) -> None:
        status = data.status if "status" in changes and data.status is not None else None
        new_status = status or PostStatus(post.status)

        if new_status is PostStatus.PUBLISHED and post.status != PostStatus.PUBLISHED:
            post.publish_date = utcnow()

        if new_status is PostStatus.SCHEDULED:
            if "scheduled_for" in changes and data.scheduled_for is not None:
                post.scheduled_for = data.scheduled_for
        else:
            post.scheduled_for = None

        post.status = new_status

    async def delete(self, post_id: str, user: CurrentUser) -> UUID:
        """
        Delete a post and reverse the counters it incremented.

        Returns:
            UUID: Id of the deleted post

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.posts.get_or_raise(parse_uuid(post_id))
        await self.posts.delete(post)
        await self.counters.post_deleted(post)

        logger.info(f"Post {post.id} deleted by {user.uid}")
        return post.id
