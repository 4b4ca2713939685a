import logging
from typing import List

from sqlmodel.ext.asyncio.session import AsyncSession

from book_reviews.core.exception_utils import raise_for_status
from book_reviews.core.exceptions import ResourceAlreadyExists
from book_reviews.crud.book_crud import BookRepository, book_repository
from book_reviews.models.book_model import Book
from book_reviews.schemas.book_schema import BookCreate, BookResponse
from book_reviews.services.cache_service import CacheService

logger = logging.getLogger(__name__)


class BookService:
    """
    Book listing and creation.

    The listing is served cache-aside under a single key; creating a book
    invalidates that key once the new row is committed.
    """

    def __init__(
        self,
        cache: CacheService,
        book_repository: BookRepository = book_repository,
    ):
        self.cache = cache
        self.book_repository = book_repository
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # ======= READ OPERATIONS =======
    async def list_books(self, db: AsyncSession) -> List[BookResponse]:
        """Get all books, from cache when possible."""

        async def load() -> List[BookResponse]:
            books = await self.book_repository.get_all(db=db)
            self._logger.info(f"Book list retrieved : {len(books)} books returned")
            return [BookResponse.model_validate(book) for book in books]

        return await self.cache.get_or_load(
            self.cache.keys.all_books(), load, List[BookResponse]
        )

    # ======= WRITE OPERATIONS =======
    async def create_book(self, db: AsyncSession, *, book_data: BookCreate) -> Book:
        """Create a book and invalidate the cached listing."""

        # Check for conflicts
        existing_book = await self.book_repository.get_by_title_and_author(
            db=db, title=book_data.title, author=book_data.author
        )
        raise_for_status(
            condition=existing_book is not None,
            exception=ResourceAlreadyExists,
            detail="Book already exists",
            resource_type="Book",
        )

        book_to_create = Book(**book_data.model_dump())
        new_book = await self.book_repository.create(db=db, obj_in=book_to_create)

        # Only reached once the row is committed
        await self.cache.invalidate(self.cache.keys.all_books())

        self._logger.info(
            f"New book created: {new_book.title}", extra={"book_id": new_book.id}
        )
        return new_book
