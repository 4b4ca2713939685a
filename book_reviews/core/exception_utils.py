# book_reviews/core/exception_utils.py
"""
Small helpers shared by services and repositories for raising and
translating exceptions.
"""

import functools
import logging
from typing import Any, Callable, Optional, Type

from book_reviews.core.exceptions import AppException, InternalServerError

logger = logging.getLogger(__name__)


def raise_for_status(
    *,
    condition: bool,
    exception: Type[AppException],
    detail: Optional[str] = None,
    resource_type: Optional[str] = None,
    resource_id: Optional[Any] = None,
) -> None:
    """Raise `exception` when `condition` holds."""
    if condition:
        raise exception(
            detail=detail, resource_type=resource_type, resource_id=resource_id
        )


def handle_exceptions(
    *,
    default_exception: Type[AppException] = InternalServerError,
    message: str = "An unexpected error occurred.",
) -> Callable:
    """
    Decorator for async repository methods.

    Application exceptions pass through untouched; anything else is logged
    with its traceback and re-raised as `default_exception` so internals
    never leak into a response.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except AppException:
                raise
            except Exception as exc:
                logger.error(
                    f"{func.__qualname__} failed: {message}",
                    exc_info=True,
                    extra={"error_type": type(exc).__name__},
                )
                raise default_exception(detail=message) from exc

        return wrapper

    return decorator
