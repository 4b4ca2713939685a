# book_reviews/db/session.py
"""
Async database engine and session management.

A single `Database` instance owns the engine for the whole process; it is
connected in the application lifespan and handed to request handlers
through the `get_session` dependency.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from book_reviews.core.config import settings

logger = logging.getLogger(__name__)


class Database:
    """Holds the engine and session factory for one database URL."""

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    def _create_engine(self) -> AsyncEngine:
        if self.database_url.startswith("sqlite"):
            # In-memory SQLite must share one connection across sessions
            kwargs = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in self.database_url:
                kwargs["poolclass"] = StaticPool
            return create_async_engine(self.database_url, echo=self.echo, **kwargs)
        return create_async_engine(
            self.database_url, echo=self.echo, pool_pre_ping=True
        )

    async def connect(self) -> None:
        """Create the engine and make sure all tables exist."""
        if self.engine is not None:
            return
        # Register table metadata before create_all
        from book_reviews.models import book_model, review_model  # noqa: F401

        self.engine = self._create_engine()
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database connected successfully")

    async def disconnect(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database connection closed")

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        async with self.session_factory() as session:
            yield session


def create_database() -> Database:
    return Database(settings.DATABASE_URL, echo=settings.DB_ECHO)


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session from the app's database."""
    database: Database = request.app.state.db
    async for session in database.session():
        yield session
