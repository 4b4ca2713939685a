import logging
from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from book_reviews.core.exception_utils import handle_exceptions
from book_reviews.core.exceptions import InternalServerError
from book_reviews.crud.base_crud import BaseRepository
from book_reviews.models.review_model import Review

logger = logging.getLogger(__name__)


class ReviewRepository(BaseRepository[Review]):

    def __init__(self):
        super().__init__(Review)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get(self, db: AsyncSession, *, obj_id: int) -> Optional[Review]:
        """Get a review by its id"""
        statement = select(self.model).where(self.model.id == obj_id)
        result = await db.exec(statement)
        return result.first()

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get_book_reviews(self, db: AsyncSession, *, book_id: int) -> List[Review]:
        """Get reviews for a book in creation order"""
        statement = (
            select(self.model)
            .where(self.model.book_id == book_id)
            .order_by(self.model.id)
        )
        result = await db.exec(statement)
        return list(result.all())

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def create(self, db: AsyncSession, *, obj_in: Review) -> Review:
        """Create a review"""
        db.add(obj_in)
        await db.commit()
        await db.refresh(obj_in)
        self._logger.info(f"Review created: {obj_in.id}")
        return obj_in


review_repository = ReviewRepository()
