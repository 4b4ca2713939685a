import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from book_reviews.core.exception_utils import raise_for_status
from book_reviews.core.exceptions import ResourceNotFound, ValidationError
from book_reviews.crud.book_crud import BookRepository, book_repository
from book_reviews.crud.review_crud import ReviewRepository, review_repository
from book_reviews.models.book_model import MAX_BOOK_ID
from book_reviews.models.review_model import Review
from book_reviews.schemas.review_schema import (
    BookReviewsResponse,
    ReviewCreate,
    ReviewSummary,
)
from book_reviews.services.cache_service import CacheService

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Reviews of a single book.

    The per-book listing is cached under a key derived from the book id.
    A book that does not exist, or has no reviews yet, is reported as not
    found and never cached.
    """

    def __init__(
        self,
        cache: CacheService,
        book_repository: BookRepository = book_repository,
        review_repository: ReviewRepository = review_repository,
    ):
        self.cache = cache
        self.book_repository = book_repository
        self.review_repository = review_repository
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @staticmethod
    def _validate_book_id(book_id: int) -> None:
        if book_id <= 0 or book_id > MAX_BOOK_ID:
            raise ValidationError("Invalid book ID")

    # ======= READ OPERATIONS =======
    async def get_book_reviews(
        self, db: AsyncSession, *, book_id: int
    ) -> BookReviewsResponse:
        """Get all reviews for a book."""
        self._validate_book_id(book_id)

        async def load() -> BookReviewsResponse:
            book = await self.book_repository.get(db=db, obj_id=book_id)
            raise_for_status(
                condition=book is None,
                exception=ResourceNotFound,
                detail="Book not found",
            )

            reviews = await self.review_repository.get_book_reviews(
                db=db, book_id=book_id
            )
            raise_for_status(
                condition=len(reviews) == 0,
                exception=ResourceNotFound,
                detail="No reviews found for this book",
            )

            self._logger.info(
                f"Review list retrieved : {len(reviews)} reviews returned",
                extra={"book_id": book_id},
            )
            return BookReviewsResponse(
                message=f"Book: {book.title}",
                reviews=[ReviewSummary.model_validate(review) for review in reviews],
            )

        return await self.cache.get_or_load(
            self.cache.keys.book_reviews(book_id), load, BookReviewsResponse
        )

    # ========CREATE======
    async def create_review(
        self, db: AsyncSession, *, book_id: int, review_data: ReviewCreate
    ) -> Review:
        """Create a review for an existing book and invalidate its listing."""
        self._validate_book_id(book_id)

        book = await self.book_repository.get(db=db, obj_id=book_id)
        raise_for_status(
            condition=book is None,
            exception=ResourceNotFound,
            detail="Book not found",
        )

        review_dict = review_data.model_dump()
        review_dict["book_id"] = book.id

        new_review = await self.review_repository.create(
            db=db, obj_in=Review(**review_dict)
        )

        await self.cache.invalidate(self.cache.keys.book_reviews(book.id))

        self._logger.info(
            f"New review created: {new_review.id}",
            extra={"book_id": book.id, "review_id": new_review.id},
        )
        return new_review
