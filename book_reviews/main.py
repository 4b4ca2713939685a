from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI

from book_reviews.core.config import settings
from book_reviews.core.exception_handler import register_exception_handlers
from book_reviews.core.logging_config import setup_logging
from book_reviews.core.middleware import register_middlewares
from book_reviews.db.redis_conn import close_redis_client, create_redis_client
from book_reviews.db.session import Database, create_database
from book_reviews.services.cache_service import CacheService

# Routers
from book_reviews.api.v1.endpoints import book, review


def create_lifespan(database: Optional[Database] = None, redis_client: Any = None):
    """
    Build the lifespan handler. Tests pass their own database and cache
    client; by default both are created from settings.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: connect the stores once and share them through app.state
        db = database or create_database()
        owns_redis = redis_client is None
        client = create_redis_client() if owns_redis else redis_client

        await db.connect()
        app.state.db = db
        app.state.cache_service = CacheService(client)

        yield

        # Shutdown
        if owns_redis:
            await close_redis_client(client)
        await db.disconnect()

    return lifespan


def create_application(
    database: Optional[Database] = None, redis_client: Any = None
) -> FastAPI:
    """Create and configure the FastAPI application."""
    setup_logging()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=settings.DESCRIPTION,
        lifespan=create_lifespan(database, redis_client),
    )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(book.router)
    app.include_router(review.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_application()
