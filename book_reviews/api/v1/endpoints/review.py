import logging

from fastapi import APIRouter, Depends, Path, status
from sqlmodel.ext.asyncio.session import AsyncSession

from book_reviews.core.config import settings
from book_reviews.db.session import get_session
from book_reviews.models.book_model import MAX_BOOK_ID
from book_reviews.schemas.review_schema import (
    BookReviewsResponse,
    ReviewCreate,
    ReviewCreatedResponse,
    ReviewResponse,
)
from book_reviews.services.review_service import ReviewService
from book_reviews.utils.deps import get_review_service

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Reviews"],
    prefix=settings.BOOKS_PREFIX,
)


@router.get(
    "/{book_id}/review",
    status_code=status.HTTP_200_OK,
    response_model=BookReviewsResponse,
    summary="Get reviews for a book",
    description="Fetches all reviews associated with a specific book.",
    responses={404: {"description": "Book not found or no reviews"}},
)
async def get_book_reviews(
    *,
    book_id: int = Path(
        ..., gt=0, le=MAX_BOOK_ID, description="ID of the book", examples=[1]
    ),
    db: AsyncSession = Depends(get_session),
    review_service: ReviewService = Depends(get_review_service),
):
    """Get all reviews written for a specific book."""
    return await review_service.get_book_reviews(db=db, book_id=book_id)


@router.post(
    "/{book_id}/review",
    status_code=status.HTTP_201_CREATED,
    response_model=ReviewCreatedResponse,
    summary="Add a review to a book",
    description="Submits a new review for the specified book.",
    responses={
        400: {"description": "Invalid input"},
        404: {"description": "Book not found"},
    },
)
async def add_review(
    *,
    book_id: int = Path(
        ..., gt=0, le=MAX_BOOK_ID, description="ID of the book", examples=[2]
    ),
    db: AsyncSession = Depends(get_session),
    review_service: ReviewService = Depends(get_review_service),
    review_data: ReviewCreate,
):
    """
    Create a review.
    - **reviewText**: The review (required)
    - **rating**: A number from 1 to 5 (required)
    """
    review = await review_service.create_review(
        db=db, book_id=book_id, review_data=review_data
    )
    return ReviewCreatedResponse(
        message="Review added", review=ReviewResponse.model_validate(review)
    )
