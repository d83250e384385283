"""Database engine and session helpers."""

from cms.db.database import (
    SessionMaker,
    build_engine,
    build_session_maker,
    close_db,
    init_db,
    ping,
    transaction,
)

__all__ = [
    "SessionMaker",
    "build_engine",
    "build_session_maker",
    "close_db",
    "init_db",
    "ping",
    "transaction",
]
