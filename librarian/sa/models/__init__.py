from .base import Base
from .user import User
from .author import Author
from .tag import Tag
from .book import Book, BookAuthor, BookTag
from .series import Series, BookSeries
from .wish import Wish, WishAuthor, WishSeries

__all__ = [
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
