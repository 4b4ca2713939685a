# book_reviews/utils/deps.py
"""
FastAPI dependencies.

Store handles are created once in the application lifespan and kept on
`app.state`; these dependencies hand them to the services explicitly.
"""

from fastapi import Depends, Request

from book_reviews.services.book_service import BookService
from book_reviews.services.cache_service import CacheService
from book_reviews.services.review_service import ReviewService


def get_cache_service(request: Request) -> CacheService:
    return request.app.state.cache_service


def get_book_service(cache: CacheService = Depends(get_cache_service)) -> BookService:
    return BookService(cache=cache)


def get_review_service(
    cache: CacheService = Depends(get_cache_service),
) -> ReviewService:
    return ReviewService(cache=cache)


__all__ = [
    "get_cache_service",
    "get_book_service",
    "get_review_service",
]
