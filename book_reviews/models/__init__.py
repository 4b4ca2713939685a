# Both tables must be registered before either mapper is configured
from book_reviews.models.book_model import Book
from book_reviews.models.review_model import Review

__all__ = ["Book", "Review"]
