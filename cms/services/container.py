"""Service container built once at startup."""

from dataclasses import dataclass, field
from logging import getLogger
from typing import Self

from sqlalchemy.ext.asyncio import AsyncEngine

from cms.clients.identity import JwtIdentityProvider
from cms.clients.protocols import IdentityProvider
from cms.configs import Settings, file_logger
from cms.db.database import SessionMaker, build_engine, build_session_maker, close_db

logger = file_logger(getLogger(__name__))


@dataclass(slots=True)
class ServiceContainer:
    """
    Long-lived handles shared by all requests.

    Stored on ``app.state.services`` by the lifespan; request dependencies
    read it from there, and tests build one around their own engine and a
    fake identity provider.

    Attributes:
        engine: Async database engine
        session_maker: Session factory bound to the engine
        identity: Identity provider client
        admin_emails: Emails promoted to admin on first sign-in
    """

    engine: AsyncEngine
    session_maker: SessionMaker
    identity: IdentityProvider
    admin_emails: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        engine = build_engine(settings)
        return cls(
            engine=engine,
            session_maker=build_session_maker(engine),
            identity=JwtIdentityProvider.from_settings(settings),
            admin_emails=settings.admin_emails,
        )

    async def aclose(self) -> None:
        """Release the identity client and database connections."""
        await self.identity.aclose()
        await close_db(self.engine)
        logger.info("Service container closed")
