"""Fixtures for repository tests against an in-memory database."""

from collections.abc import AsyncIterator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database import Database


@pytest_asyncio.fixture
async def database() -> AsyncIterator[Database]:
    """Create a fresh schema in an in-memory SQLite database."""
    db = Database("sqlite+aiosqlite://")
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncIterator[AsyncSession]:
    """Open a session on the test database."""
    async with database.session() as db_session:
        yield db_session
