"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL. Every test gets a fresh engine and schema; the API
client overrides the session dependency to use it.
"""

from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from journal.api.app import create_app
from journal.api.dependencies import get_db
from journal.api.middleware import limiter
from journal.infrastructure import models  # noqa: F401  (registers tables)
from journal.infrastructure.database import Base


# ── Test DB (SQLite in-memory) ────────────────────────────────────────

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create tables on a private in-memory database, then drop everything."""
    test_engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    event.listen(test_engine.sync_engine, "connect", _enable_foreign_keys)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient backed by the in-memory database, rate limiting off."""

    async def _test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db] = _test_db
    limiter.enabled = False

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    limiter.enabled = True
