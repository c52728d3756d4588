# librarian/sa/repositories/author.py
import uuid
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from librarian.sa.models import Author, Book, BookAuthor
from .base import clean_names, get_or_create_by_name

class AuthorRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, author_id: int) -> Optional[Author]:
        """Get an author by ID"""
        return self.session.get(Author, author_id)

    def get_by_name(self, name: str) -> Optional[Author]:
        """Get an author by exact name"""
        return self.session.query(Author).filter(Author.name == name).first()

    def get_or_create(self, name: str) -> Author:
        """Get an author by name, creating it if this is the first reference"""
        return get_or_create_by_name(self.session, Author, name.strip())

    def get_or_create_many(self, names: Iterable[str]) -> List[Author]:
        """Resolve a list of names to authors, deduplicated, in input order"""
        return [self.get_or_create(name) for name in clean_names(names)]

    def list_names_for_owner(self, owner_id: uuid.UUID) -> List[str]:
        """Names of the authors of the owner's books, for completion"""
        rows = (
            self.session.query(Author.name)
            .join(BookAuthor, BookAuthor.author_id == Author.id)
            .join(Book, Book.id == BookAuthor.book_id)
            .filter(Book.owner_id == owner_id)
            .distinct()
            .order_by(Author.name)
            .all()
        )
        return [name for (name,) in rows]

    def get_books_for_owner(self, author_id: int, owner_id: uuid.UUID) -> List[Book]:
        """Get the owner's books by an author, undated books first then by publication date"""
        books = (
            self.session.query(Book)
            .join(BookAuthor, BookAuthor.book_id == Book.id)
            .filter(
                BookAuthor.author_id == author_id,
                Book.owner_id == owner_id
            )
            .all()
        )
        return sorted(books, key=lambda b: (b.published is not None, b.published or 0, b.title))
