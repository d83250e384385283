"""Fixtures for repository tests."""

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from cms.models import CategoryDB, PostDB
from cms.repositories import CategoryRepository, PostRepository, UserRepository

BASE_TIME = datetime(2026, 1, 1, tzinfo=UTC)


@pytest.fixture
def posts(session: AsyncSession) -> PostRepository:
    return PostRepository(session)


@pytest.fixture
def categories(session: AsyncSession) -> CategoryRepository:
    return CategoryRepository(session)


@pytest.fixture
def users(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
async def travel(session: AsyncSession) -> CategoryDB:
    record = CategoryDB(name="Travel", slug="travel")
    session.add(record)
    await session.commit()
    return record


@pytest.fixture
def add_post(session: AsyncSession, travel: CategoryDB) -> Callable[..., Awaitable[PostDB]]:
    """Insert a post row; later calls get later update times."""
    offsets = iter(range(1000))

    async def _add(
        title: str,
        *,
        content: str = "Body",
        author_id: str = "author-1",
        status: str = "draft",
    ) -> PostDB:
        stamp = BASE_TIME + timedelta(minutes=next(offsets))
        post = PostDB(
            title=title,
            slug=title.lower().replace(" ", "-"),
            description=f"About {title}",
            content=content,
            author_id=author_id,
            category_id=travel.id,
            status=status,
            created_at=stamp,
            updated_at=stamp,
        )
        session.add(post)
        await session.commit()
        return post

    return _add
