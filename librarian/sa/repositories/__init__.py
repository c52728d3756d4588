from .user import UserRepository
from .book import BookRepository
from .author import AuthorRepository
from .tag import TagRepository
from .series import SeriesRepository
from .wish import WishRepository

__all__ = [
    'UserRepository',
    'BookRepository',
    'AuthorRepository',
    'TagRepository',
    'SeriesRepository',
    'WishRepository'
]
