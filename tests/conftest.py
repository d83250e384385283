# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before the application settings are imported anywhere
os.environ["LOG_TO_FILE"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ADMIN_EMAILS"] = "boss@example.com"
os.environ["IDENTITY_SECRET_KEY"] = "test-secret"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession  # noqa: E402

from cms.configs import settings  # noqa: E402
from cms.db import (  # noqa: E402
    SessionMaker,
    build_engine,
    build_session_maker,
    close_db,
    init_db,
    transaction,
)
from cms.main import app  # noqa: E402
from cms.managers import limiter  # noqa: E402
from cms.models import CategoryDB, PostDB, UserDB  # noqa: E402
from cms.rbac import Role, get_role_permissions  # noqa: E402
from cms.services import ServiceContainer  # noqa: E402
from fakes import FakeIdentityProvider  # noqa: E402

type Headers = dict[str, str]


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database per test."""
    db_engine = build_engine(settings)
    await init_db(db_engine)
    yield db_engine
    await close_db(db_engine)


@pytest.fixture
def session_maker(engine: AsyncEngine) -> SessionMaker:
    return build_session_maker(engine)


@pytest.fixture
async def session(session_maker: SessionMaker) -> AsyncGenerator[AsyncSession]:
    """A plain session for repository and service tests; callers commit explicitly."""
    async with session_maker() as db_session:
        yield db_session


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def services(
    engine: AsyncEngine,
    session_maker: SessionMaker,
    identity: FakeIdentityProvider,
) -> ServiceContainer:
    return ServiceContainer(
        engine=engine,
        session_maker=session_maker,
        identity=identity,
        admin_emails=settings.admin_emails,
    )


@pytest.fixture
async def client(services: ServiceContainer) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    app.state.services = services
    limiter.enabled = False
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    limiter.enabled = True


@pytest.fixture
def create_user(
    session_maker: SessionMaker,
    identity: FakeIdentityProvider,
) -> Callable[..., Awaitable[Headers]]:
    """Insert a user record and return bearer headers for it."""

    async def _create(
        uid: str,
        role: Role | str | None = Role.AUTHOR,
        *,
        active: bool = True,
        email: str | None = None,
        permissions: list[str] | None = None,
    ) -> Headers:
        email = email or f"{uid}@example.com"
        async with transaction(session_maker) as db_session:
            db_session.add(
                UserDB(
                    uid=uid,
                    email=email,
                    display_name=uid,
                    role=role or "",
                    permissions=get_role_permissions(role) if permissions is None else permissions,
                    active=active,
                ),
            )
        return {"Authorization": f"Bearer {identity.issue(uid, email)}"}

    return _create


@pytest.fixture
async def admin_headers(create_user: Callable[..., Awaitable[Headers]]) -> Headers:
    return await create_user("admin-1", Role.ADMIN)


@pytest.fixture
async def editor_headers(create_user: Callable[..., Awaitable[Headers]]) -> Headers:
    return await create_user("editor-1", Role.EDITOR)


@pytest.fixture
async def author_headers(create_user: Callable[..., Awaitable[Headers]]) -> Headers:
    return await create_user("author-1", Role.AUTHOR)


@pytest.fixture
def create_category(session_maker: SessionMaker) -> Callable[..., Awaitable[CategoryDB]]:
    """Insert a category directly."""

    async def _create(
        name: str,
        *,
        parent_id: UUID | None = None,
        active: bool = True,
        featured: bool = False,
        sort_order: int = 999,
    ) -> CategoryDB:
        category = CategoryDB(
            name=name,
            slug=name.lower().replace(" ", "-"),
            description=f"All about {name}",
            parent_id=parent_id,
            active=active,
            featured=featured,
            sort_order=sort_order,
        )
        async with transaction(session_maker) as db_session:
            db_session.add(category)
        return category

    return _create


@pytest.fixture
def get_record(session_maker: SessionMaker) -> Callable[..., Awaitable[object]]:
    """Load a fresh copy of a row by primary key."""

    async def _get(model: type[CategoryDB | PostDB | UserDB], key: object) -> object:
        if isinstance(key, str) and model is not UserDB:
            key = UUID(key)
        async with session_maker() as db_session:
            return await db_session.get(model, key)

    return _get

