"""Slug generation and uniqueness checks."""

import re
from uuid import UUID

from cms.errors import ConflictError, ValidationError
from cms.repositories.base import BaseRepository

_NON_SLUG_CHARS = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def generate_slug(text: str) -> str:
    """
    Build a URL-friendly slug from a title or name.

    Lower-cases the text, drops characters other than word characters,
    whitespace and hyphens, collapses whitespace and hyphen runs into a
    single hyphen and trims hyphens and underscores from both ends.
    Applying it to its own output returns the output unchanged.

    Args:
        text: Source title or name

    Returns:
        str: The slug

    Raises:
        ValidationError: If nothing slug-worthy is left
    """
    slug = _NON_SLUG_CHARS.sub("", text.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    slug = slug.strip("-_")
    if not slug:
        raise ValidationError("Title or name must contain at least one letter or number")
    return slug


async def ensure_unique(
    repo: BaseRepository,
    slug: str,
    exclude_id: UUID | str | None = None,
) -> None:
    """
    Reject a slug already held by another record.

    Args:
        repo: Repository of the entity the slug belongs to
        slug: Candidate slug
        exclude_id: Record being updated, which may keep its own slug

    Raises:
        ConflictError: If another record holds the slug
    """
    if await repo.slug_taken(slug, exclude_id):
        raise ConflictError(repo.conflict_detail)
