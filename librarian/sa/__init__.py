# librarian/sa/__init__.py
from .database import Database
from .models import (
    Base, User, Author, Tag, Book, BookAuthor, BookTag,
    Series, BookSeries, Wish, WishAuthor, WishSeries
)

__all__ = [
    'Database',
    'Base',
    'User',
    'Author',
    'Tag',
    'Book',
    'BookAuthor',
    'BookTag',
    'Series',
    'BookSeries',
    'Wish',
    'WishAuthor',
    'WishSeries'
]
