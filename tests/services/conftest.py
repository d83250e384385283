"""Fixtures for service tests sharing one session."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from cms.models import CategoryDB, UserDB
from cms.rbac import Role, get_role_permissions
from cms.repositories import CategoryRepository, PostRepository, UserRepository
from cms.schemas import CurrentUser
from cms.services import (
    CategoryIntegrityChecker,
    CategoryService,
    CounterMaintainer,
    PostLifecycleManager,
)


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
def integrity(categories: CategoryRepository, posts: PostRepository) -> CategoryIntegrityChecker:
    return CategoryIntegrityChecker(categories, posts)


@pytest.fixture
def category_service(
    categories: CategoryRepository,
    integrity: CategoryIntegrityChecker,
) -> CategoryService:
    return CategoryService(categories, integrity)


@pytest.fixture
def lifecycle(
    posts: PostRepository,
    categories: CategoryRepository,
    users: UserRepository,
) -> PostLifecycleManager:
    return PostLifecycleManager(posts, categories, CounterMaintainer(categories, users))


@pytest.fixture
def author() -> CurrentUser:
    return CurrentUser(
        uid="author-1",
        email="author-1@example.com",
        role=Role.AUTHOR,
        permissions=tuple(get_role_permissions(Role.AUTHOR)),
    )


@pytest.fixture
def other_author() -> CurrentUser:
    return CurrentUser(
        uid="author-2",
        email="author-2@example.com",
        role=Role.AUTHOR,
        permissions=tuple(get_role_permissions(Role.AUTHOR)),
    )


@pytest.fixture
def editor() -> CurrentUser:
    return CurrentUser(
        uid="editor-1",
        email="editor-1@example.com",
        role=Role.EDITOR,
        permissions=tuple(get_role_permissions(Role.EDITOR)),
    )


@pytest.fixture
async def author_record(session: AsyncSession, author: CurrentUser) -> UserDB:
    record = UserDB(
        uid=author.uid,
        email=author.email or "",
        display_name="Author One",
        role=Role.AUTHOR,
        permissions=get_role_permissions(Role.AUTHOR),
    )
    session.add(record)
    await session.commit()
    return record


@pytest.fixture
async def category(session: AsyncSession) -> CategoryDB:
    record = CategoryDB(name="Travel", slug="travel")
    session.add(record)
    await session.commit()
    return record


@pytest.fixture
async def second_category(session: AsyncSession) -> CategoryDB:
    record = CategoryDB(name="Food", slug="food")
    session.add(record)
    await session.commit()
    return record
