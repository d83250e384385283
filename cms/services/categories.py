"""Category write operations."""

from logging import getLogger
from typing import Any
from uuid import UUID

from cms.configs import file_logger
from cms.models.category import CategoryDB
from cms.repositories.category import CategoryRepository
from cms.schemas.auth import CurrentUser
from cms.schemas.category import CategoryCreate, CategoryUpdate
from cms.services.category_integrity import CategoryIntegrityChecker
from cms.services.slug import ensure_unique, generate_slug
from cms.utils.helpers import parse_uuid, utcnow

logger = file_logger(getLogger(__name__))


def default_seo(name: str, description: str) -> dict[str, Any]:
    return {"title": name, "description": description, "keywords": []}


def default_hero(name: str, description: str, background: str | None = None) -> dict[str, Any]:
    return {"title": name, "subtitle": description, "backgroundImage": background or ""}


class CategoryService:
    """Creates, updates and deletes categories under the integrity rules."""

    def __init__(self, categories: CategoryRepository, integrity: CategoryIntegrityChecker) -> None:
        self.categories = categories
        self.integrity = integrity

    async def get(self, category_id: str) -> CategoryDB:
        return await self.categories.get_or_raise(parse_uuid(category_id))

    async def create(self, data: CategoryCreate, user: CurrentUser) -> CategoryDB:
        """
        Create a category.

        Raises:
            ValidationError: If the name yields no slug or the parent is missing
            ConflictError: If another category holds the slug
        """
        slug = generate_slug(data.name)
        await ensure_unique(self.categories, slug)

        parent_id = await self.integrity.check_parent(data.parent_id) if data.parent_id else None

        now = utcnow()
        category = CategoryDB(
            name=data.name,
            slug=slug,
            description=data.description,
            color=data.color,
            icon=data.icon,
            featured_image=data.featured_image,
            parent_id=parent_id,
            featured=data.featured,
            active=data.active,
            sort_order=data.sort_order,
            post_count=0,
            total_views=0,
            seo=data.seo or default_seo(data.name, data.description),
            hero=data.hero or default_hero(data.name, data.description, data.featured_image),
            created_by=user.uid,
            last_modified_by=user.uid,
            created_at=now,
            updated_at=now,
        )
        category = await self.categories.add(category)

        logger.info(f"Category {category.id} ({slug}) created by {user.uid}")
        return category

    async def update(self, category_id: str, data: CategoryUpdate, user: CurrentUser) -> CategoryDB:
        """
        Apply a partial update to a category.

        A changed name re-derives and re-checks the slug; a provided parent
        is re-validated against the full ancestor chain.

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If the parent is missing or would close a cycle
            ConflictError: If the new name's slug is taken
        """
        category = await self.get(category_id)
        changes = data.model_dump(exclude_unset=True)

        if "name" in changes and data.name is not None and data.name != category.name:
            slug = generate_slug(data.name)
            await ensure_unique(self.categories, slug, exclude_id=category.id)
            category.name = data.name
            category.slug = slug

        if "parent_id" in changes:
            category.parent_id = (
                await self.integrity.check_parent(data.parent_id, category.id)
                if data.parent_id
                else None
            )

        for field in ("description", "color", "icon", "featured", "active", "sort_order"):
            if field in changes and changes[field] is not None:
                setattr(category, field, changes[field])
        if "featured_image" in changes:
            category.featured_image = data.featured_image
        if "seo" in changes and data.seo is not None:
            category.seo = data.seo
        if "hero" in changes and data.hero is not None:
            category.hero = data.hero

        category.last_modified_by = user.uid
        category.updated_at = utcnow()
        category = await self.categories.save(category)

        logger.info(f"Category {category.id} updated by {user.uid}")
        return category

    async def delete(self, category_id: str, user: CurrentUser) -> UUID:
        """
        Delete an unreferenced category.

        Raises:
            NotFoundError: If the category does not exist
            ValidationError: If posts or child categories reference it
        """
        category = await self.get(category_id)
        await self.integrity.check_deletable(category.id)
        await self.categories.delete(category)

        logger.info(f"Category {category.id} deleted by {user.uid}")
        return category.id
