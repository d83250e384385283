"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger

from sqlalchemy import event, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from cms.configs import Settings, file_logger
from cms.errors import BaseAppError, ConflictError, DatabaseConnectionError

logger = file_logger(getLogger(__name__))

SessionMaker = async_sessionmaker[AsyncSession]


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(
        dbapi_connection: object,
        connection_record: object,
        connection_proxy: object,
    ) -> None:
        logger.debug("Connection checked out from pool")


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database URL.

    Pool sizing only applies to server databases; SQLite URLs get a single
    shared connection so in-memory databases survive across sessions.

    Args:
        settings: Application settings

    Returns:
        AsyncEngine: Configured engine
    """
    if settings.DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            pool_size=settings.POOL_SIZE,
            max_overflow=settings.MAX_OVERFLOW,
            pool_timeout=settings.POOL_TIMEOUT,
            pool_recycle=settings.POOL_RECYCLE,
            pool_pre_ping=True,
        )

    if settings.DEBUG:
        _configure_engine_events(engine)

    return engine


def build_session_maker(engine: AsyncEngine) -> SessionMaker:
    """Create the session factory bound to an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@asynccontextmanager
async def transaction(session_maker: SessionMaker) -> AsyncGenerator[AsyncSession]:
    """
    Context manager for one unit of work.

    Commits on successful exit and rolls back on any exception. A unique
    constraint violation surfacing at commit time is reported as a
    conflict.

    Args:
        session_maker: Session factory to open the session from

    Yields:
        AsyncSession: Database session within a transaction

    Example:
        ```python
        async with transaction(services.session_maker) as session:
            session.add(CategoryDB(name="Travel", slug="travel"))
            # Commits on successful exit, rolls back on exception
        ```
    """
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            logger.warning(f"Integrity error on commit: {e.orig}")
            raise ConflictError from e
        except BaseAppError:
            await session.rollback()
            raise
        except Exception:
            await session.rollback()
            logger.exception("Transaction error")
            raise


async def ping(engine: AsyncEngine) -> None:
    """Run a trivial query to confirm the database is reachable."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.exception("Database ping failed")
        raise DatabaseConnectionError from e


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize database tables.

    This function creates all tables defined in SQLModel models.

    Note:
        This is a simple initialization for development and tests.
        For production, use the Alembic migrations.
    """
    async with engine.begin() as conn:
        # Import all models to ensure they are registered
        from cms.models import CategoryDB, PostDB, UserDB  # noqa: F401, PLC0415

        await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database initialized successfully!")


async def close_db(engine: AsyncEngine) -> None:
    """
    Close database connections.

    This function should be called on application shutdown
    to properly close all database connections.
    """
    await engine.dispose()
    logger.info("Database connections closed")
