# book_reviews/db/redis_conn.py
import logging

from redis import asyncio as aioredis

from book_reviews.core.config import settings

logger = logging.getLogger(__name__)


def create_redis_client(url: str = settings.REDIS_URL) -> aioredis.Redis:
    """
    Build the process-wide Redis client.

    No connection is opened here; the first command connects lazily, so an
    unavailable Redis never blocks startup. Socket timeouts keep a hung
    server from hanging a request.
    """
    client = aioredis.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=settings.REDIS_CONNECT_TIMEOUT,
    )
    logger.info("Redis client created", extra={"redis_url": _redact(url)})
    return client


async def close_redis_client(client: aioredis.Redis) -> None:
    try:
        await client.aclose()
    except Exception:
        logger.warning("Error while closing Redis client", exc_info=True)


def _redact(url: str) -> str:
    """Hide credentials from log output."""
    if "@" not in url:
        return url
    scheme, _, rest = url.partition("://")
    return f"{scheme}://***@{rest.split('@', 1)[1]}"
