# librarian/resolvers/book_creator.py
import logging
import uuid
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from librarian.errors import DuplicateBook
from librarian.metadata.types import BookDetails, SeriesPosition
from librarian.sa.models import Book, User
from librarian.sa.repositories import AuthorRepository, BookRepository, SeriesRepository, TagRepository
from librarian.utils.covers import CoverStore
from librarian.utils.isbn import normalize_isbn

logger = logging.getLogger(__name__)

# Width of the isbn column
MAX_ISBN_LENGTH = 17

class BookCreator:
    """Creates and updates book records in the database."""
    
    def __init__(self, session: Session, covers: Optional[CoverStore] = None):
        """
        Initialize the book creator.
        
        Args:
            session: SQLAlchemy session
            covers: Where cover art is stored, covers are dropped if None
        """
        self.session = session
        self.covers = covers
        self.book_repository = BookRepository(session)
        self.author_repository = AuthorRepository(session)
        self.tag_repository = TagRepository(session)
        self.series_repository = SeriesRepository(session)

    def _validate(self, details: BookDetails) -> str:
        isbn = normalize_isbn(details.isbn or "")
        if not isbn:
            raise ValueError("A book needs an ISBN")
        if len(isbn) > MAX_ISBN_LENGTH:
            raise ValueError(f"An ISBN has at most {MAX_ISBN_LENGTH} characters")
        if not details.title or not details.title.strip():
            raise ValueError("A book needs a title")
        if details.series is not None and not details.series.name.strip():
            raise ValueError("A series position needs a series name")
        return isbn

    def _apply_fields(self, book: Book, details: BookDetails, isbn: str) -> None:
        book.isbn = isbn
        book.title = details.title.strip()
        book.summary = details.summary or ""
        book.published = details.published
        book.publisher = details.publisher
        book.language = details.language
        book.google_id = details.google_id
        book.goodreads_id = details.goodreads_id
        book.amazon_id = details.amazon_id
        book.librarything_id = details.librarything_id
        book.page_count = details.page_count
        book.owned = details.owned
        book.read = details.read

    def _apply_relationships(self, book: Book, details: BookDetails) -> None:
        """Link authors, tags and series, creating authors and tags on first reference"""
        authors = self.author_repository.get_or_create_many(details.authors)
        self.book_repository.set_authors(book, [a.id for a in authors])

        tags = self.tag_repository.get_or_create_many(details.tags)
        self.book_repository.set_tags(book, [t.id for t in tags])

        self._apply_series(book, details.series)

    def _apply_series(self, book: Book, position: Optional[SeriesPosition]) -> None:
        if position is None:
            self.series_repository.remove_book(book)
            return
        series = self.series_repository.get_or_create(book.owner_id, position.name)
        self.series_repository.place_book(book, series, position.number)

    def _flush_book(self, book: Book, isbn: str) -> None:
        try:
            self.session.flush()
        except IntegrityError:
            self.session.rollback()
            raise DuplicateBook(isbn)

    def _save_cover(self, book: Book, cover: Optional[bytes]) -> None:
        if cover and self.covers is not None:
            self.covers.save(book.owner_id, book.id, cover)

    def create_book(self, owner: User, details: BookDetails) -> Book:
        """
        Creates a book and its relationships in a single transaction
        
        Args:
            owner: The user adding the book
            details: Book information, from a provider and/or the user
            
        Returns:
            Created Book object
        
        Raises:
            ValueError: If the ISBN or title is missing
            DuplicateBook: If the owner already has a book with this ISBN
            SeriesPositionTaken: If the series number is used by another book
        """
        isbn = self._validate(details)
        if self.book_repository.has_isbn(owner.id, isbn):
            raise DuplicateBook(isbn)

        book = Book(owner_id=owner.id)
        self._apply_fields(book, details, isbn)
        self.session.add(book)
        self._flush_book(book, isbn)

        try:
            self._apply_relationships(book, details)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(f"Added '{book.title}' ({isbn}) for {owner.name}")
        self._save_cover(book, details.cover)
        return book

    def update_book(self, owner: User, book_id: uuid.UUID, details: BookDetails) -> Optional[Book]:
        """
        Replaces a book's fields, authors, tags and series position
        
        Returns:
            The updated Book, or None if the owner has no such book

        Raises:
            ValueError: If the ISBN or title is missing
            DuplicateBook: If the new ISBN is used by another of the owner's books
            SeriesPositionTaken: If the series number is used by another book
        """
        book = self.book_repository.get_for_owner(book_id, owner.id)
        if not book:
            return None

        isbn = self._validate(details)
        other = self.book_repository.get_by_isbn(owner.id, isbn)
        if other is not None and other.id != book.id:
            raise DuplicateBook(isbn)

        try:
            self._apply_fields(book, details, isbn)
            self._flush_book(book, isbn)
            self._apply_relationships(book, details)
            self.session.commit()
        except DuplicateBook:
            raise
        except Exception:
            self.session.rollback()
            raise

        self._save_cover(book, details.cover)
        return book

    def details_for(self, book: Book) -> BookDetails:
        """Turn a stored book back into editable details"""
        position = None
        if book.book_series is not None:
            position = SeriesPosition(name=book.book_series.series.name, number=book.book_series.number)

        cover = self.covers.load(book.owner_id, book.id) if self.covers is not None else None

        return BookDetails(
            isbn=book.isbn,
            title=book.title,
            authors=[a.name for a in book.authors],
            tags=[t.name for t in book.tags],
            summary=book.summary,
            published=book.published,
            publisher=book.publisher,
            language=book.language,
            google_id=book.google_id,
            amazon_id=book.amazon_id,
            librarything_id=book.librarything_id,
            goodreads_id=book.goodreads_id,
            page_count=book.page_count,
            cover=cover,
            owned=book.owned,
            read=book.read,
            series=position,
        )
