from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Column, Field, Relationship, SQLModel, Text

if TYPE_CHECKING:
    from book_reviews.models.book_model import Book


class ReviewBase(SQLModel):
    review_text: str = Field(
        ...,
        min_length=1,
        description="Review text",
        schema_extra={"example": "A moving and unforgettable story."},
    )
    rating: float = Field(
        ...,
        ge=1,
        le=5,
        description="Rating from 1 to 5",
        schema_extra={"example": 4.5},
    )


class Review(ReviewBase, table=True):

    __tablename__ = "reviews"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating"),
    )

    id: Optional[int] = Field(
        primary_key=True, default=None, description="Unique identifier for Review"
    )

    review_text: str = Field(sa_column=Column(Text, nullable=False))

    book_id: int = Field(
        foreign_key="books.id",
        index=True,
        nullable=False,
        description="ID of the reviewed book",
    )

    # Relationships
    book: Optional["Book"] = Relationship(back_populates="reviews")

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, book_id={self.book_id}, rating={self.rating})>"
