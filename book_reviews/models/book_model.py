# book_reviews/models/book_model.py
"""
Book model definition.

Books are created once and never mutated; `(title, author)` is unique so
the database rejects duplicates even when two requests race past the
application-level existence check.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from book_reviews.models.review_model import Review


class BookBase(SQLModel):

    title: str = Field(
        min_length=1,
        max_length=255,
        description="The title of the book",
        schema_extra={"example": "The Great Gatsby"},
    )
    author: str = Field(
        min_length=1,
        max_length=255,
        description="The author of the book",
        schema_extra={"example": "F. Scott Fitzgerald"},
    )


# Largest value an INTEGER primary key column holds on every supported database
MAX_BOOK_ID = 2**31 - 1


class Book(BookBase, table=True):
    __tablename__ = "books"
    __table_args__ = (
        UniqueConstraint("title", "author", name="uq_book_title_author"),
    )

    id: Optional[int] = Field(
        default=None, primary_key=True, description="A unique identifier for Book"
    )

    # Relationships
    reviews: List["Review"] = Relationship(back_populates="book")

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}', author='{self.author}')>"
