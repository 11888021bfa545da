"""Database configuration and session management.

Provides the async SQLAlchemy engine and session factory wrapped in a
handle that the application acquires on startup and releases on shutdown.
"""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Base class for models."""


class Database:
    """Process-scoped database handle.

    Owns the engine and the session factory. Created once in the
    application lifespan and stored on ``app.state``.

    Example usage:
        database = Database("sqlite+aiosqlite://")
        await database.create_all()
        async with database.session() as session:
            ...
        await database.dispose()
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        """Create engine and session factory.

        Args:
            url: SQLAlchemy async database URL.
            echo: Whether to log SQL statements.
        """
        self.url = url
        self.engine: AsyncEngine = self._create_engine(url, echo)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @staticmethod
    def _create_engine(url: str, echo: bool) -> AsyncEngine:
        if url.startswith("sqlite"):
            # In-memory databases only live as long as their single connection
            engine = create_async_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )

            @event.listens_for(engine.sync_engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):
                """Enforce foreign keys on SQLite."""
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

            return engine

        return create_async_engine(url, echo=echo, pool_pre_ping=True)

    def session(self) -> AsyncSession:
        """Open a new session."""
        return self.session_factory()

    async def create_all(self) -> None:
        """Create all tables known to the model metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        """Drop all tables known to the model metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        """Check database connectivity."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        """Release all pooled connections."""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """Get the database handle attached to the running application."""
    return request.app.state.database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Handlers commit explicitly once their work is done; anything left
    uncommitted when the request fails is rolled back.

    Yields:
        AsyncSession for database operations.
    """
    async with get_database(request).session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
