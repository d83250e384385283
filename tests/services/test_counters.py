"""Tests for category and author counter maintenance."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from cms.models import CategoryDB, UserDB
from cms.schemas import CurrentUser, PostCreate, PostUpdate
from cms.services import PostLifecycleManager


async def _reload(session: AsyncSession, record: CategoryDB | UserDB) -> CategoryDB | UserDB:
    await session.refresh(record)
    return record


def _body(category: CategoryDB, title: str, status: str = "draft") -> PostCreate:
    return PostCreate.model_validate(
        {
            "title": title,
            "description": "Description",
            "content": "Some content here",
            "categoryId": str(category.id),
            "status": status,
        },
    )


@pytest.mark.asyncio
async def test_create_increments_counters(
    session: AsyncSession,
    lifecycle: PostLifecycleManager,
    category: CategoryDB,
    author: CurrentUser,
    author_record: UserDB,
) -> None:
    await lifecycle.create(_body(category, "Draft one"), author)
    await lifecycle.create(_body(category, "Published one", "published"), author)

    category = await _reload(session, category)
    user = await _reload(session, author_record)
    assert category.post_count == 2
    assert user.posts_count == 2
    assert user.drafts_count == 1


@pytest.mark.asyncio
async def test_delete_reverses_counters(
    session: AsyncSession,
    lifecycle: PostLifecycleManager,
    category: CategoryDB,
    author: CurrentUser,
    author_record: UserDB,
) -> None:
    post = await lifecycle.create(_body(category, "Draft one"), author)
    await lifecycle.delete(str(post.id), author)

    category = await _reload(session, category)
    user = await _reload(session, author_record)
    assert category.post_count == 0
    assert user.posts_count == 0
    assert user.drafts_count == 0


@pytest.mark.asyncio
async def test_moving_category_shifts_post_count(
    session: AsyncSession,
    lifecycle: PostLifecycleManager,
    category: CategoryDB,
    second_category: CategoryDB,
    author: CurrentUser,
    author_record: UserDB,
) -> None:
    post = await lifecycle.create(_body(category, "Mover"), author)

    await lifecycle.update(
        str(post.id),
        PostUpdate.model_validate({"categoryId": str(second_category.id)}),
        author,
    )

    assert (await _reload(session, category)).post_count == 0
    assert (await _reload(session, second_category)).post_count == 1


@pytest.mark.asyncio
async def test_same_category_update_leaves_counts(
    session: AsyncSession,
    lifecycle: PostLifecycleManager,
    category: CategoryDB,
    author: CurrentUser,
    author_record: UserDB,
) -> None:
    post = await lifecycle.create(_body(category, "Stayer"), author)

    await lifecycle.update(
        str(post.id),
        PostUpdate.model_validate({"categoryId": str(category.id), "title": "Still here"}),
        author,
    )

    assert (await _reload(session, category)).post_count == 1


@pytest.mark.asyncio
async def test_status_transitions_track_drafts(
    session: AsyncSession,
    lifecycle: PostLifecycleManager,
    category: CategoryDB,
    author: CurrentUser,
    author_record: UserDB,
) -> None:
    post = await lifecycle.create(_body(category, "Drafty"), author)
    assert (await _reload(session, author_record)).drafts_count == 1

    await lifecycle.update(str(post.id), PostUpdate.model_validate({"status": "published"}), author)
    assert (await _reload(session, author_record)).drafts_count == 0

    await lifecycle.update(str(post.id), PostUpdate.model_validate({"status": "draft"}), author)
    user = await _reload(session, author_record)
    assert user.drafts_count == 1
    assert user.posts_count == 1
