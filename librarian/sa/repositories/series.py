# librarian/sa/repositories/series.py
import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from librarian.errors import SeriesPositionTaken
from librarian.sa.models import Book, BookSeries, Series, Wish, WishSeries

@dataclass
class SeriesSummary:
    series: Series
    owned_count: int

    @property
    def complete(self) -> bool:
        return self.series.total_count is not None and self.owned_count >= self.series.total_count

@dataclass
class OngoingOverview:
    # Series with a known total that miss volumes, with the missing numbers
    missing: List[Tuple[Series, List[int]]] = field(default_factory=list)
    # Ongoing series of which every published volume is owned
    all_owned: List[Series] = field(default_factory=list)

class SeriesRepository:
    """Repository for managing Series entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.
        
        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_for_owner(self, series_id: uuid.UUID, owner_id: uuid.UUID) -> Optional[Series]:
        return (
            self.session.query(Series)
            .filter(Series.id == series_id, Series.owner_id == owner_id)
            .first()
        )

    def get_by_name(self, owner_id: uuid.UUID, name: str) -> Optional[Series]:
        return (
            self.session.query(Series)
            .filter(Series.owner_id == owner_id, Series.name == name)
            .first()
        )

    def get_or_create(self, owner_id: uuid.UUID, name: str) -> Series:
        """Get one of the owner's series by name, creating it if needed"""
        name = name.strip()
        series = self.get_by_name(owner_id, name)
        if not series:
            series = Series(owner_id=owner_id, name=name)
            self.session.add(series)
            self.session.flush()
        return series

    def list_names_for_owner(self, owner_id: uuid.UUID) -> List[str]:
        rows = (
            self.session.query(Series.name)
            .filter(Series.owner_id == owner_id)
            .order_by(Series.name)
            .all()
        )
        return [name for (name,) in rows]

    def list_with_counts(self, owner_id: uuid.UUID) -> List[SeriesSummary]:
        """Get the owner's series with the number of owned books in each.
        
        Args:
            owner_id: The user whose series are listed
            
        Returns:
            List of SeriesSummary ordered by series name
        """
        owned_count = func.count(Book.id)
        rows = (
            self.session.query(Series, owned_count)
            .outerjoin(BookSeries, BookSeries.series_id == Series.id)
            .outerjoin(Book, (Book.id == BookSeries.book_id) & Book.owned.is_(True))
            .filter(Series.owner_id == owner_id)
            .group_by(Series.id)
            .order_by(Series.name)
            .all()
        )
        return [SeriesSummary(series=series, owned_count=count) for series, count in rows]

    def get_books(self, series_id: uuid.UUID, owner_id: uuid.UUID) -> List[Tuple[Book, int]]:
        """Get the owner's books in a series with their number, in series order"""
        return (
            self.session.query(Book, BookSeries.number)
            .join(BookSeries, BookSeries.book_id == Book.id)
            .filter(
                BookSeries.series_id == series_id,
                Book.owner_id == owner_id
            )
            .order_by(BookSeries.number.asc())
            .all()
        )

    def update_series(
        self,
        series_id: uuid.UUID,
        owner_id: uuid.UUID,
        name: str,
        ongoing: Optional[bool] = None,
        total_count: Optional[int] = None,
    ) -> Optional[Series]:
        """Update a series' details.
        
        Args:
            series_id: The series to update
            owner_id: The user the series must belong to
            name: New name
            ongoing: Whether more volumes are expected, unchanged if None
            total_count: Number of published volumes, None when unknown
            
        Returns:
            The updated Series if found, None otherwise

        Raises:
            ValueError: If the name is blank or the owner already has another
                series with this name
        """
        if not name.strip():
            raise ValueError("A series needs a name")
        series = self.get_for_owner(series_id, owner_id)
        if not series:
            return None

        series.name = name.strip()
        if ongoing is not None:
            series.ongoing = ongoing
        series.total_count = total_count
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise ValueError(f"A series named '{name}' already exists")
        return series

    def _position_holder(self, model, series_id: uuid.UUID, number: int):
        return (
            self.session.query(model)
            .filter(model.series_id == series_id, model.number == number)
            .first()
        )

    def place_book(self, book: Book, series: Series, number: int) -> BookSeries:
        """Put a book at ``number`` in ``series``, replacing any previous position.

        Raises:
            SeriesPositionTaken: If another book already has this number
        """
        holder = self._position_holder(BookSeries, series.id, number)
        if holder is not None and holder.book_id != book.id:
            raise SeriesPositionTaken(series.name, number)

        if book.book_series is not None:
            if book.book_series.series_id == series.id and book.book_series.number == number:
                return book.book_series
            self.session.delete(book.book_series)
            self.session.flush()

        position = BookSeries(book_id=book.id, series_id=series.id, number=number)
        self.session.add(position)
        self.session.flush()
        self.session.refresh(book)
        return position

    def remove_book(self, book: Book) -> None:
        if book.book_series is not None:
            self.session.delete(book.book_series)
            self.session.flush()
            self.session.refresh(book)

    def place_wish(self, wish: Wish, series: Series, number: int) -> WishSeries:
        """Put a wished book at ``number`` in ``series``.

        Raises:
            SeriesPositionTaken: If another wish already has this number
        """
        holder = self._position_holder(WishSeries, series.id, number)
        if holder is not None and holder.wish_id != wish.id:
            raise SeriesPositionTaken(series.name, number)

        position = WishSeries(wish_id=wish.id, series_id=series.id, number=number)
        self.session.add(position)
        self.session.flush()
        return position

    def missing_volumes(self, series: Series) -> List[int]:
        """Volume numbers up to ``total_count`` without an owned book"""
        if series.total_count is None:
            return []
        owned = {
            number for (number,) in (
                self.session.query(BookSeries.number)
                .join(Book, Book.id == BookSeries.book_id)
                .filter(BookSeries.series_id == series.id, Book.owned.is_(True))
                .all()
            )
        }
        return [n for n in range(1, series.total_count + 1) if n not in owned]

    def ongoing_overview(self, owner_id: uuid.UUID) -> OngoingOverview:
        """Split the owner's series into those missing volumes and the
        ongoing ones that are fully owned.

        Series without a known total only show up when they are ongoing
        and fully owned, which they cannot be, so they are left out.
        """
        overview = OngoingOverview()
        for summary in self.list_with_counts(owner_id):
            series = summary.series
            if summary.complete:
                if series.ongoing:
                    overview.all_owned.append(series)
            elif series.total_count is not None:
                overview.missing.append((series, self.missing_volumes(series)))
        return overview
