# tests/services/test_review_service.py
from typing import List

import pytest

from book_reviews.core.exceptions import ResourceNotFound, ValidationError
from book_reviews.models.book_model import Book
from book_reviews.models.review_model import Review
from book_reviews.schemas.review_schema import ReviewCreate
from book_reviews.services.cache_service import CacheService
from book_reviews.services.review_service import ReviewService
from tests.mocks.fake_redis import FakeRedis
from tests.mocks.mock_book_repository import FakeBookRepository, FakeReviewRepository

# Mark all tests in this file as async
pytestmark = pytest.mark.asyncio


@pytest.fixture
def book_repository() -> FakeBookRepository:
    return FakeBookRepository(
        initial_books=[
            Book(id=1, title="Dune", author="Herbert"),
            Book(id=2, title="Emma", author="Austen"),
        ]
    )


@pytest.fixture
def review_repository(events: List[str]) -> FakeReviewRepository:
    return FakeReviewRepository(
        initial_reviews=[Review(id=1, book_id=1, review_text="Great", rating=5)],
        events=events,
    )


@pytest.fixture
def review_service(
    cache_service: CacheService,
    book_repository: FakeBookRepository,
    review_repository: FakeReviewRepository,
) -> ReviewService:
    return ReviewService(
        cache=cache_service,
        book_repository=book_repository,
        review_repository=review_repository,
    )


# ==================== get_book_reviews TESTS ====================


async def test_get_book_reviews_shapes_and_caches_listing(
    review_service: ReviewService, fake_redis: FakeRedis
):
    response = await review_service.get_book_reviews(db=None, book_id=1)

    assert response.model_dump(by_alias=True) == {
        "message": "Book: Dune",
        "reviews": [{"reviewText": "Great", "rating": 5.0}],
    }
    assert review_service.cache.keys.book_reviews(1) in fake_redis.store


async def test_get_book_reviews_for_missing_book_is_not_cached(
    review_service: ReviewService, fake_redis: FakeRedis
):
    with pytest.raises(ResourceNotFound, match="Book not found"):
        await review_service.get_book_reviews(db=None, book_id=999999)

    assert fake_redis.store == {}


async def test_book_without_reviews_is_not_found_and_not_cached(
    review_service: ReviewService, fake_redis: FakeRedis
):
    with pytest.raises(ResourceNotFound, match="No reviews found for this book"):
        await review_service.get_book_reviews(db=None, book_id=2)

    assert fake_redis.store == {}


async def test_non_positive_book_id_is_rejected_before_any_store_access(
    review_service: ReviewService, fake_redis: FakeRedis
):
    with pytest.raises(ValidationError):
        await review_service.get_book_reviews(db=None, book_id=0)

    assert fake_redis.calls == []


# ==================== create_review TESTS ====================


async def test_create_review_persists_then_invalidates_book_key(
    review_service: ReviewService, events: List[str]
):
    await review_service.get_book_reviews(db=None, book_id=1)
    events.clear()

    review = await review_service.create_review(
        db=None, book_id=1, review_data=ReviewCreate(review_text="Sandworms!", rating=4)
    )

    key = review_service.cache.keys.book_reviews(1)
    assert review.book_id == 1
    assert events == [f"db.create:review:{review.id}", f"cache.delete:{key}"]

    response = await review_service.get_book_reviews(db=None, book_id=1)
    assert [r.review_text for r in response.reviews] == ["Great", "Sandworms!"]


async def test_create_review_only_invalidates_its_own_book(
    review_service: ReviewService, fake_redis: FakeRedis
):
    await review_service.get_book_reviews(db=None, book_id=1)

    await review_service.create_review(
        db=None, book_id=2, review_data=ReviewCreate(review_text="Witty", rating=5)
    )

    assert review_service.cache.keys.book_reviews(1) in fake_redis.store
    assert ("delete", review_service.cache.keys.book_reviews(2)) in fake_redis.calls


async def test_create_review_for_missing_book_creates_nothing(
    review_service: ReviewService,
    review_repository: FakeReviewRepository,
    events: List[str],
):
    with pytest.raises(ResourceNotFound, match="Book not found"):
        await review_service.create_review(
            db=None,
            book_id=999999,
            review_data=ReviewCreate(review_text="Orphan", rating=3),
        )

    assert len(review_repository.reviews) == 1
    assert events == []


async def test_book_id_beyond_integer_column_is_rejected(
    review_service: ReviewService, fake_redis: FakeRedis
):
    with pytest.raises(ValidationError, match="Invalid book ID"):
        await review_service.get_book_reviews(db=None, book_id=2**31)

    with pytest.raises(ValidationError, match="Invalid book ID"):
        await review_service.create_review(
            db=None, book_id=99999999999999999999999,
            review_data=ReviewCreate(review_text="Great", rating=5),
        )

    assert fake_redis.calls == []
