"""Tests for CategoryRepository and UserRepository helpers."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from cms.models import CategoryDB, UserDB
from cms.repositories import CategoryRepository, UserRepository


@pytest.fixture
async def catalogue(session: AsyncSession) -> list[CategoryDB]:
    records = [
        CategoryDB(name="Travel", slug="travel", sort_order=2, post_count=5, total_views=10),
        CategoryDB(name="Food", slug="food", sort_order=1, post_count=1, total_views=50),
        CategoryDB(name="Archive", slug="archive", sort_order=3, active=False, featured=True),
    ]
    session.add_all(records)
    await session.commit()
    return records


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("sort", "expected"),
    [
        (None, ["Food", "Travel", "Archive"]),
        ("name", ["Archive", "Food", "Travel"]),
        ("-name", ["Travel", "Food", "Archive"]),
        ("posts", ["Travel", "Food", "Archive"]),
        ("views", ["Food", "Travel", "Archive"]),
    ],
)
async def test_sorts(
    categories: CategoryRepository,
    catalogue: list[CategoryDB],
    sort: str | None,
    expected: list[str],
) -> None:
    rows, total = await categories.list_categories(offset=0, limit=10, sort=sort)

    assert [row.name for row in rows] == expected
    assert total == 3


@pytest.mark.asyncio
async def test_status_and_featured_filters(
    categories: CategoryRepository,
    catalogue: list[CategoryDB],
) -> None:
    inactive, _ = await categories.list_categories(offset=0, limit=10, status="inactive")
    featured, _ = await categories.list_categories(offset=0, limit=10, featured=True)
    _, total = await categories.list_categories(offset=0, limit=10, status="whatever")

    assert [row.name for row in inactive] == ["Archive"]
    assert [row.name for row in featured] == ["Archive"]
    assert total == 3


@pytest.mark.asyncio
async def test_parent_lookup_and_children(
    session: AsyncSession,
    categories: CategoryRepository,
    catalogue: list[CategoryDB],
) -> None:
    travel = catalogue[0]
    child = CategoryDB(name="Asia", slug="asia", parent_id=travel.id)
    session.add(child)
    await session.commit()

    assert await categories.get_parent_id(child.id) == (True, travel.id)
    assert await categories.get_parent_id(travel.id) == (True, None)
    assert await categories.has_children(travel.id)
    assert not await categories.has_children(child.id)


@pytest.mark.asyncio
async def test_adjust_post_count_is_relative(
    session: AsyncSession,
    categories: CategoryRepository,
    catalogue: list[CategoryDB],
) -> None:
    travel = catalogue[0]

    await categories.adjust_post_count(travel.id, 2)
    await categories.adjust_post_count(travel.id, -1)
    await session.commit()
    await session.refresh(travel)

    assert travel.post_count == 6


@pytest.mark.asyncio
async def test_user_counters_and_email(session: AsyncSession, users: UserRepository) -> None:
    session.add(UserDB(uid="u1", email="jane@example.com", display_name="Jane", role="author"))
    await session.commit()

    await users.adjust_post_counts("u1", posts=1, drafts=1)
    await users.adjust_post_counts("u1", drafts=-1)
    await session.commit()
    user = await users.get_or_raise("u1")
    await session.refresh(user)

    assert (user.posts_count, user.drafts_count) == (1, 0)
    assert await users.email_taken("JANE@example.com")
    assert not await users.email_taken("jane@example.com", exclude_uid="u1")
