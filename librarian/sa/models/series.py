# librarian/sa/models/series.py
import uuid
from sqlalchemy import Boolean, ForeignKey, Integer, Text, UniqueConstraint, Uuid, false
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base

class BookSeries(Base):
    """Position of a book in a series. A book is in at most one series."""
    __tablename__ = 'bookseries'

    book_id: Mapped[uuid.UUID] = mapped_column('book', ForeignKey('book.id'), primary_key=True)
    series_id: Mapped[uuid.UUID] = mapped_column('series', ForeignKey('series.id'), nullable=False)
    number: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    book = relationship('Book', back_populates='book_series')
    series = relationship('Series', back_populates='book_series')

    __table_args__ = (
        UniqueConstraint('series', 'number', name='bookseries_series_number_key'),
    )

class Series(Base):
    __tablename__ = 'series'

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column('owner', ForeignKey('users.id'), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    ongoing: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    total_count: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Relationships
    user = relationship('User', back_populates='series')
    book_series = relationship('BookSeries', back_populates='series', order_by='BookSeries.number')
    wish_series = relationship('WishSeries', back_populates='series', order_by='WishSeries.number')

    # Convenience relationship
    books = relationship('Book', secondary='bookseries', viewonly=True)

    __table_args__ = (
        UniqueConstraint('owner', 'name', name='series_owner_name_key'),
    )
