# librarian/sa/repositories/book.py
import uuid
from typing import Dict, List, Optional, Tuple
from sqlalchemy.orm import Session, joinedload, selectinload
from librarian.sa.models import Book, BookAuthor, BookSeries, BookTag, Series

class BookRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_for_owner(self, book_id: uuid.UUID, owner_id: uuid.UUID) -> Optional[Book]:
        """Get a book by ID, only if it belongs to ``owner_id``"""
        return (
            self.session.query(Book)
            .options(
                selectinload(Book.authors),
                selectinload(Book.tags),
                joinedload(Book.book_series).joinedload(BookSeries.series)
            )
            .filter(Book.id == book_id, Book.owner_id == owner_id)
            .first()
        )

    def get_by_isbn(self, owner_id: uuid.UUID, isbn: str) -> Optional[Book]:
        return (
            self.session.query(Book)
            .filter(Book.owner_id == owner_id, Book.isbn == isbn)
            .first()
        )

    def has_isbn(self, owner_id: uuid.UUID, isbn: str) -> bool:
        """Check whether the owner already has a book with this ISBN"""
        return (
            self.session.query(Book.id)
            .filter(Book.owner_id == owner_id, Book.isbn == isbn)
            .count()
        ) > 0

    def _owner_query(self, owner_id: uuid.UUID, query: Optional[str]):
        base_query = self.session.query(Book).filter(Book.owner_id == owner_id)
        if query:  # Only apply filter if query is not empty
            base_query = base_query.filter(Book.title.ilike(f"%{query}%"))
        return base_query

    def search_books(
        self,
        owner_id: uuid.UUID,
        query: Optional[str] = None,
        limit: int = 50,
        offset: int = 0
    ) -> List[Book]:
        """Search the owner's books by title.
        
        Args:
            owner_id: The user whose books are searched
            query: Optional search string matched against titles
            limit: Maximum number of books to return
            offset: Number of books to skip
            
        Returns:
            List of Book objects ordered by title
        """
        return (
            self._owner_query(owner_id, query)
            .options(selectinload(Book.authors))
            .order_by(Book.title)
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count_books(self, owner_id: uuid.UUID, query: Optional[str] = None) -> int:
        return self._owner_query(owner_id, query).count()

    def get_unread_by_series(self, owner_id: uuid.UUID) -> Tuple[List[Book], Dict[Series, List[Book]]]:
        """Get the owner's unread books grouped by series.

        Returns:
            Tuple of (books in no series, series -> books in series order)
        """
        rows = (
            self.session.query(Book, Series)
            .outerjoin(BookSeries, BookSeries.book_id == Book.id)
            .outerjoin(Series, Series.id == BookSeries.series_id)
            .filter(Book.owner_id == owner_id, Book.read.is_(False))
            .order_by(Series.name, BookSeries.number, Book.title)
            .all()
        )

        no_series: List[Book] = []
        by_series: Dict[Series, List[Book]] = {}
        for book, series in rows:
            if series is None:
                no_series.append(book)
            else:
                by_series.setdefault(series, []).append(book)
        return no_series, by_series

    def set_authors(self, book: Book, author_ids: List[int]) -> None:
        """Replace the authors of a book"""
        book.book_authors = [BookAuthor(book_id=book.id, author_id=a) for a in author_ids]
        self.session.flush()

    def set_tags(self, book: Book, tag_ids: List[int]) -> None:
        """Replace the tags of a book"""
        book.book_tags = [BookTag(book_id=book.id, tag_id=t) for t in tag_ids]
        self.session.flush()
