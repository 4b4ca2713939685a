# book_reviews/schemas/review_schema.py
"""
Review schemas for request/response models.

`BookReviewsResponse` is also the cached representation of a book's
review listing, so a cache hit and a fresh read render identically.
"""

from typing import Annotated, List, Union

from pydantic import Field, StringConstraints, field_serializer

from book_reviews.schemas.base_schema import APIModel

# Numbers only: "5" and true are rejected. Each member carries the bounds.
Rating = Union[
    Annotated[int, Field(strict=True, ge=1, le=5)],
    Annotated[float, Field(strict=True, ge=1, le=5)],
]


class ReviewBase(APIModel):
    """Base schema for review data."""

    review_text: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, strict=True)
    ] = Field(
        ...,
        description="Review text",
        examples=["Absolutely loved it! A must-read."],
    )
    rating: Rating = Field(..., description="Rating from 1 to 5", examples=[4.8])

    @field_serializer("rating")
    def serialize_rating(self, rating: Union[int, float]) -> Union[int, float]:
        """Whole-number ratings go out as integers, the way clients send them."""
        if isinstance(rating, float) and rating.is_integer():
            return int(rating)
        return rating


class ReviewCreate(ReviewBase):
    """Schema for creating a review. The book comes from the URL."""

    pass


class ReviewSummary(ReviewBase):
    """A review as shown in a book's review listing."""

    pass


class ReviewResponse(ReviewBase):
    """A stored review."""

    id: int = Field(..., description="Review ID")
    book_id: int = Field(..., description="Reviewed book ID")


class BookReviewsResponse(APIModel):
    message: str = Field(..., examples=["Book: The Great Gatsby"])
    reviews: List[ReviewSummary] = Field(default_factory=list)


class ReviewCreatedResponse(APIModel):
    message: str = Field(..., examples=["Review added"])
    review: ReviewResponse


__all__ = [
    "ReviewBase",
    "ReviewCreate",
    "ReviewSummary",
    "ReviewResponse",
    "BookReviewsResponse",
    "ReviewCreatedResponse",
]
