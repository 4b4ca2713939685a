import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import and_, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from book_reviews.core.exception_utils import handle_exceptions
from book_reviews.core.exceptions import InternalServerError, ResourceAlreadyExists
from book_reviews.crud.base_crud import BaseRepository
from book_reviews.models.book_model import Book

logger = logging.getLogger(__name__)


class BookRepository(BaseRepository[Book]):
    """Repository for all database operations related to the Book model."""

    def __init__(self):
        super().__init__(Book)
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get(self, db: AsyncSession, *, obj_id: int) -> Optional[Book]:
        """Retrieves a book by its ID."""
        statement = select(self.model).where(self.model.id == obj_id)
        result = await db.exec(statement)
        return result.first()

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get_all(self, db: AsyncSession) -> List[Book]:
        """Retrieves every book, oldest first."""
        statement = select(self.model).order_by(self.model.id)
        result = await db.exec(statement)
        return list(result.all())

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def get_by_title_and_author(
        self, db: AsyncSession, *, title: str, author: str
    ) -> Optional[Book]:
        """Case-insensitive lookup used for the duplicate check."""
        statement = select(self.model).where(
            and_(
                func.lower(self.model.title) == title.lower(),
                func.lower(self.model.author) == author.lower(),
            )
        )
        result = await db.exec(statement)
        return result.first()

    @handle_exceptions(
        default_exception=InternalServerError,
        message="An unexpected database error occurred.",
    )
    async def create(self, db: AsyncSession, *, obj_in: Book) -> Book:
        """Persist a pre-constructed Book model object."""
        db.add(obj_in)
        try:
            await db.commit()
        except IntegrityError:
            # Lost a race against an identical create
            await db.rollback()
            raise ResourceAlreadyExists(detail="Book already exists")
        await db.refresh(obj_in)
        self._logger.info(f"Book created: {obj_in.id}")
        return obj_in


book_repository = BookRepository()
