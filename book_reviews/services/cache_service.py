import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Type, TypeVar, Union

from book_reviews.core.cache import CacheKeys, CachePayloadCodec, cache_keys
from book_reviews.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheService:
    """
    Cache-aside reads and write invalidation on top of a Redis client.

    The cache is never the source of truth: every failure talking to the
    store (error or timeout) is logged and treated as a miss on reads and
    as a no-op on writes.
    """

    def __init__(
        self,
        client: Any,
        *,
        ttl: int = settings.CACHE_TTL_SECONDS,
        operation_timeout: float = settings.CACHE_OPERATION_TIMEOUT,
        enabled: bool = settings.CACHE_ENABLED,
        keys: CacheKeys = cache_keys,
        codec: Optional[CachePayloadCodec] = None,
    ):
        self.client = client
        self.ttl = ttl
        self.operation_timeout = operation_timeout
        self.enabled = enabled and client is not None
        self.keys = keys
        self.codec = codec or CachePayloadCodec()
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # ======= LOW LEVEL, FAIL-OPEN =======
    async def _call(self, coro: Awaitable) -> Any:
        return await asyncio.wait_for(coro, timeout=self.operation_timeout)

    async def get(self, key: str) -> Optional[str]:
        """Raw payload for `key`, or None on a miss or any cache failure."""
        if not self.enabled:
            return None
        try:
            return await self._call(self.client.get(key))
        except Exception:
            self._logger.warning(f"Cache lookup failed for key: {key}", exc_info=True)
            return None

    async def set(self, key: str, payload: str) -> bool:
        if not self.enabled:
            return False
        try:
            await self._call(self.client.set(key, payload, ex=self.ttl))
            return True
        except Exception:
            self._logger.warning(f"Failed to cache payload with key: {key}", exc_info=True)
            return False

    async def delete(self, key: str) -> bool:
        if not self.enabled:
            return False
        try:
            await self._call(self.client.delete(key))
            return True
        except Exception:
            self._logger.warning(
                f"Failed to invalidate cache for key: {key}", exc_info=True
            )
            return False

    # ======= CACHE-ASIDE READ PATH =======
    async def get_or_load(
        self,
        key: str,
        loader: Callable[[], Awaitable[T]],
        schema: Union[Type[T], Any],
    ) -> T:
        """
        Return the cached value for `key`, or load, cache and return it.

        Whatever `loader` raises propagates and nothing is cached, so
        not-found outcomes are never stored.
        """
        cached = await self.get(key)
        if cached is not None:
            value = self.codec.decode(cached, schema)
            if value is not None:
                self._logger.info("Cache hit", extra={"cache_key": key})
                return value

        self._logger.info("Cache miss", extra={"cache_key": key})
        value = await loader()

        if self.enabled:
            payload = self.codec.encode(value, schema)
            if await self.set(key, payload):
                self._logger.info(
                    "Cache populated", extra={"cache_key": key, "ttl": self.ttl}
                )
        return value

    # ======= WRITE-INVALIDATION PATH =======
    async def invalidate(self, *keys: str) -> None:
        """
        Drop every key made stale by a write that has already been persisted.

        A failed delete leaves a stale entry that expires with its TTL.
        """
        for key in keys:
            if await self.delete(key):
                self._logger.info("Cache invalidated", extra={"cache_key": key})
            elif self.enabled:
                self._logger.error(
                    "Cache invalidation failed; entry stays stale until its TTL expires",
                    extra={"cache_key": key, "ttl": self.ttl},
                )
