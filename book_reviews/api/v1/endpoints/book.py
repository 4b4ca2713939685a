import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from book_reviews.core.config import settings
from book_reviews.db.session import get_session
from book_reviews.schemas.book_schema import (
    BookCreate,
    BookCreatedResponse,
    BookResponse,
)
from book_reviews.services.book_service import BookService
from book_reviews.utils.deps import get_book_service

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Books"],
    prefix=settings.BOOKS_PREFIX,
)


@router.get(
    "/",
    response_model=List[BookResponse],
    status_code=status.HTTP_200_OK,
    summary="Retrieve a list of books",
    description="Returns all books in the system.",
)
async def get_books(
    *,
    db: AsyncSession = Depends(get_session),
    book_service: BookService = Depends(get_book_service),
):
    """Get all books."""
    return await book_service.list_books(db=db)


@router.post(
    "/",
    response_model=BookCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a new book",
    description="Creates a new book entry in the database.",
)
async def add_book(
    *,
    db: AsyncSession = Depends(get_session),
    book_service: BookService = Depends(get_book_service),
    book_data: BookCreate,
):
    """
    Create a new book.
    - **title**: The title of the book (required)
    - **author**: The author of the book (required)
    """
    book = await book_service.create_book(db=db, book_data=book_data)
    return BookCreatedResponse(message="Book added", book=BookResponse.model_validate(book))
