"""
Async SQLAlchemy engine and session factory.

PostgreSQL is reached through ``asyncpg``; any other async URL (for instance
``sqlite+aiosqlite``) is accepted without pool sizing.
"""

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from journal.config import settings


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
    }


engine = create_async_engine(
    settings.database_url,
    echo=False,
    **_engine_options(settings.database_url),
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""
