# tests/services/test_cache_service.py
import logging
from typing import List
from unittest.mock import AsyncMock

import pytest

from book_reviews.core.exceptions import ResourceNotFound
from book_reviews.schemas.book_schema import BookResponse
from book_reviews.services.cache_service import CacheService
from tests.mocks.fake_redis import FailingRedis, FakeRedis, HangingRedis

# Mark all tests in this file as async
pytestmark = pytest.mark.asyncio

KEY = "test:books:all"


def books() -> List[BookResponse]:
    return [BookResponse(id=1, title="Dune", author="Herbert")]


# ==================== get_or_load TESTS ====================


async def test_miss_loads_and_populates_with_ttl(
    cache_service: CacheService, fake_redis: FakeRedis
):
    loader = AsyncMock(return_value=books())

    result = await cache_service.get_or_load(KEY, loader, List[BookResponse])

    assert result == books()
    loader.assert_awaited_once()
    assert KEY in fake_redis.store
    assert 3590 <= await fake_redis.ttl(KEY) <= 3600


async def test_hit_skips_loader(cache_service: CacheService):
    await cache_service.get_or_load(KEY, AsyncMock(return_value=books()), List[BookResponse])
    loader = AsyncMock(return_value=[])

    result = await cache_service.get_or_load(KEY, loader, List[BookResponse])

    assert result == books()
    loader.assert_not_awaited()


async def test_hit_and_miss_return_identical_payloads(cache_service: CacheService):
    loader = AsyncMock(return_value=books())

    miss = await cache_service.get_or_load(KEY, loader, List[BookResponse])
    hit = await cache_service.get_or_load(KEY, loader, List[BookResponse])

    assert [b.model_dump(by_alias=True) for b in miss] == [
        b.model_dump(by_alias=True) for b in hit
    ]
    assert loader.await_count == 1


async def test_loader_errors_propagate_and_are_not_cached(
    cache_service: CacheService, fake_redis: FakeRedis
):
    loader = AsyncMock(side_effect=ResourceNotFound(detail="Book not found"))

    with pytest.raises(ResourceNotFound, match="Book not found"):
        await cache_service.get_or_load(KEY, loader, List[BookResponse])

    assert KEY not in fake_redis.store
    assert ("set", KEY) not in fake_redis.calls


async def test_expired_entry_is_a_miss(cache_service: CacheService, fake_redis: FakeRedis):
    await cache_service.get_or_load(KEY, AsyncMock(return_value=[]), List[BookResponse])
    fake_redis.expire_now(KEY)
    loader = AsyncMock(return_value=books())

    result = await cache_service.get_or_load(KEY, loader, List[BookResponse])

    assert result == books()
    loader.assert_awaited_once()


async def test_undecodable_entry_is_a_miss_and_gets_overwritten(
    cache_service: CacheService, fake_redis: FakeRedis
):
    await fake_redis.set(KEY, '[{"id": 1, "title": "Dune", "author": "Herbert"}]')
    loader = AsyncMock(return_value=books())

    result = await cache_service.get_or_load(KEY, loader, List[BookResponse])

    assert result == books()
    loader.assert_awaited_once()
    assert fake_redis.store[KEY][0].startswith('{"v":')


async def test_failing_cache_falls_through_to_loader(caplog):
    failing = FailingRedis()
    service = CacheService(failing, ttl=3600, operation_timeout=0.5, enabled=True)
    loader = AsyncMock(return_value=books())

    with caplog.at_level(logging.WARNING):
        result = await service.get_or_load(KEY, loader, List[BookResponse])

    assert result == books()
    loader.assert_awaited_once()
    assert failing.attempts == 2  # get, then set
    assert "Cache lookup failed" in caplog.text


async def test_hung_cache_times_out_and_falls_through():
    service = CacheService(
        HangingRedis(delay=5), ttl=3600, operation_timeout=0.05, enabled=True
    )
    loader = AsyncMock(return_value=books())

    result = await service.get_or_load(KEY, loader, List[BookResponse])

    assert result == books()
    loader.assert_awaited_once()


async def test_disabled_cache_never_touches_the_client(fake_redis: FakeRedis):
    service = CacheService(fake_redis, enabled=False)
    loader = AsyncMock(return_value=books())

    await service.get_or_load(KEY, loader, List[BookResponse])
    await service.get_or_load(KEY, loader, List[BookResponse])
    await service.invalidate(KEY)

    assert loader.await_count == 2
    assert fake_redis.calls == []


# ==================== invalidate TESTS ====================


async def test_invalidate_deletes_every_key(
    cache_service: CacheService, fake_redis: FakeRedis
):
    await fake_redis.set("a", "1")
    await fake_redis.set("b", "2")

    await cache_service.invalidate("a", "b")

    assert fake_redis.store == {}


async def test_invalidate_failure_is_logged_not_raised(caplog):
    service = CacheService(FailingRedis(), operation_timeout=0.5, enabled=True)

    with caplog.at_level(logging.WARNING):
        await service.invalidate(KEY)

    assert "Cache invalidation failed" in caplog.text
