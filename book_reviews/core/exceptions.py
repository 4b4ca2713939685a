# book_reviews/core/exceptions.py
"""
Application exception hierarchy.

Every exception carries the HTTP status it maps to; the handlers in
`exception_handler.py` turn them into `{"message": ...}` responses.
"""

from typing import Any, Optional

from fastapi import status


class AppException(Exception):
    """Base class for all errors raised deliberately by the application."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(
        self,
        detail: Optional[str] = None,
        *,
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        if detail is None and resource_type is not None:
            detail = self._build_detail(resource_type, resource_id)
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def _build_detail(self, resource_type: str, resource_id: Optional[Any]) -> str:
        return self.default_detail

    def __str__(self) -> str:
        return self.detail


class ValidationError(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request"


class ResourceNotFound(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"

    def _build_detail(self, resource_type: str, resource_id: Optional[Any]) -> str:
        if resource_id is None:
            return f"{resource_type} not found"
        return f"{resource_type} with id {resource_id} not found"


class ResourceAlreadyExists(AppException):
    # 409 would be more precise; clients of the original API expect 400.
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Resource already exists"

    def _build_detail(self, resource_type: str, resource_id: Optional[Any]) -> str:
        return f"{resource_type} already exists"


class InternalServerError(AppException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"


__all__ = [
    "AppException",
    "ValidationError",
    "ResourceNotFound",
    "ResourceAlreadyExists",
    "InternalServerError",
]
