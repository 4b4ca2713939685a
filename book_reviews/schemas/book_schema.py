# book_reviews/schemas/book_schema.py
"""
Book schemas for request/response models.
"""
from typing import Annotated

from pydantic import Field, StringConstraints

from book_reviews.schemas.base_schema import APIModel

BookText = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=255, strict=True),
]


class BookCreate(APIModel):
    """Schema for creating a new book."""

    title: BookText = Field(
        ..., description="The title of the book", examples=["To Kill a Mockingbird"]
    )
    author: BookText = Field(
        ..., description="The author of the book", examples=["Harper Lee"]
    )


class BookResponse(APIModel):
    """Basic book response schema."""

    id: int = Field(..., description="Unique identifier for the book")
    title: str = Field(..., description="The title of the book")
    author: str = Field(..., description="The author of the book")


class BookCreatedResponse(APIModel):
    message: str = Field(..., examples=["Book added"])
    book: BookResponse


__all__ = [
    "BookCreate",
    "BookResponse",
    "BookCreatedResponse",
]
