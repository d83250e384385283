"""Tests for slug generation and uniqueness."""

import re

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from cms.errors import ConflictError, ValidationError
from cms.models import CategoryDB
from cms.repositories import CategoryRepository
from cms.services.slug import ensure_unique, generate_slug

SLUG_SHAPE = re.compile(r"^[\w-]+$")


class TestGenerateSlug:
    """Test cases for generate_slug."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Tech Tips", "tech-tips"),
            ("  Hello,   World!  ", "hello-world"),
            ("Bali -- on a   Budget", "bali-on-a-budget"),
            ("What's new in 2025?", "whats-new-in-2025"),
            ("-Leading and trailing-", "leading-and-trailing"),
            ("snake_case_title", "snake_case_title"),
            ("_underscored_", "underscored"),
            ("Tabs\tand\nnewlines", "tabs-and-newlines"),
            ("Café Society", "café-society"),
        ],
    )
    def test_normalizes_text(self, text: str, expected: str) -> None:
        """Test that titles are lower-cased, stripped and hyphenated."""
        assert generate_slug(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            "Tech Tips",
            "  --Weird__ spacing -- here--  ",
            "Ünïcödé Tïtlé",
            "C++ & Rust: a comparison!",
            "İstanbul travel",
            "a-_-b",
        ],
    )
    def test_is_idempotent(self, text: str) -> None:
        """Test that slugging a slug returns it unchanged."""
        slug = generate_slug(text)
        assert generate_slug(slug) == slug
        assert SLUG_SHAPE.match(slug)
        assert slug == slug.lower()
        assert not slug.startswith("-")
        assert not slug.endswith("-")

    @pytest.mark.parametrize("text", ["", "   ", "!!!", "--", "?? -- ??"])
    def test_rejects_text_without_letters_or_digits(self, text: str) -> None:
        """Test that an empty slug is a validation error."""
        with pytest.raises(ValidationError):
            generate_slug(text)


class TestEnsureUnique:
    """Test cases for ensure_unique."""

    @pytest.mark.asyncio
    async def test_free_slug_passes(self, session: AsyncSession) -> None:
        """Test that an unused slug is accepted."""
        await ensure_unique(CategoryRepository(session), "tech-tips")

    @pytest.mark.asyncio
    async def test_taken_slug_conflicts(self, session: AsyncSession) -> None:
        """Test that a slug held by another record raises ConflictError."""
        session.add(CategoryDB(name="Tech Tips", slug="tech-tips"))
        await session.commit()

        with pytest.raises(ConflictError) as exc_info:
            await ensure_unique(CategoryRepository(session), "tech-tips")

        assert "already exists" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_record_may_keep_its_own_slug(self, session: AsyncSession) -> None:
        """Test that the record being updated is excluded from the check."""
        category = CategoryDB(name="Tech Tips", slug="tech-tips")
        session.add(category)
        await session.commit()

        await ensure_unique(CategoryRepository(session), "tech-tips", exclude_id=category.id)
