# librarian/sa/repositories/wish.py
import uuid
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload, selectinload
from librarian.sa.models import Wish, WishAuthor, WishSeries
from .author import AuthorRepository
from .series import SeriesRepository

class WishRepository:
    """Repository for the wishlist: books a user wants but does not own."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.
        
        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session
        self.authors = AuthorRepository(session)
        self.series = SeriesRepository(session)

    def get_for_owner(self, wish_id: uuid.UUID, owner_id: uuid.UUID) -> Optional[Wish]:
        return (
            self.session.query(Wish)
            .filter(Wish.id == wish_id, Wish.owner_id == owner_id)
            .first()
        )

    def list_wishes(self, owner_id: uuid.UUID) -> List[Wish]:
        """Get the owner's wishlist ordered by name"""
        return (
            self.session.query(Wish)
            .options(
                selectinload(Wish.authors),
                joinedload(Wish.wish_series).joinedload(WishSeries.series)
            )
            .filter(Wish.owner_id == owner_id)
            .order_by(Wish.name)
            .all()
        )

    def create_wish(
        self,
        owner_id: uuid.UUID,
        name: str,
        authors: Optional[List[str]] = None,
        series_name: Optional[str] = None,
        number: Optional[int] = None,
    ) -> Wish:
        """Add a book to the owner's wishlist.
        
        Args:
            owner_id: The user making the wish
            name: Title of the wished book
            authors: Author names, created on first reference
            series_name: Optional series the book belongs to
            number: Position in the series, required with series_name
            
        Returns:
            The created Wish

        Raises:
            ValueError: If the name or series name is blank, or a series is
                given without a number
            SeriesPositionTaken: If another wish already has this position
        """
        if not name.strip():
            raise ValueError("A wish needs a name")
        if series_name is not None and not series_name.strip():
            raise ValueError("A series position needs a series name")
        if series_name and number is None:
            raise ValueError("A series position needs a volume number")

        try:
            wish = Wish(owner_id=owner_id, name=name.strip())
            self.session.add(wish)
            self.session.flush()

            for author in self.authors.get_or_create_many(authors or []):
                self.session.add(WishAuthor(wish_id=wish.id, author_id=author.id))

            if series_name:
                series = self.series.get_or_create(owner_id, series_name)
                self.series.place_wish(wish, series, number)

            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(wish)
        return wish

    def delete_wish(self, wish_id: uuid.UUID, owner_id: uuid.UUID) -> bool:
        """Remove a wish and its author and series links.
        
        Returns:
            True if the wish was deleted, False if not found
        """
        wish = self.get_for_owner(wish_id, owner_id)
        if not wish:
            return False

        self.session.delete(wish)
        self.session.commit()
        return True
