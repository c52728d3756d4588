# librarian/sa/models/wish.py
import uuid
from sqlalchemy import ForeignKey, Integer, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base

class WishAuthor(Base):
    __tablename__ = 'wishauthor'

    wish_id: Mapped[uuid.UUID] = mapped_column('wish', ForeignKey('wish.id'), primary_key=True)
    author_id: Mapped[int] = mapped_column('author', ForeignKey('author.id'), primary_key=True)

    # Relationships
    wish = relationship('Wish', back_populates='wish_authors')
    author = relationship('Author', back_populates='wish_authors')

class WishSeries(Base):
    """Position of a wished book in a series, parallel to BookSeries"""
    __tablename__ = 'wishseries'

    wish_id: Mapped[uuid.UUID] = mapped_column('wish', ForeignKey('wish.id'), primary_key=True)
    series_id: Mapped[uuid.UUID] = mapped_column('series', ForeignKey('series.id'), nullable=False)
    number: Mapped[int] = mapped_column(Integer, nullable=False)

    # Relationships
    wish = relationship('Wish', back_populates='wish_series')
    series = relationship('Series', back_populates='wish_series')

    __table_args__ = (
        UniqueConstraint('series', 'number', name='wishseries_series_number_key'),
    )

class Wish(Base):
    """A book the user wants but does not own yet."""
    __tablename__ = 'wish'

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column('owner', ForeignKey('users.id'), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    # Relationships
    user = relationship('User', back_populates='wishes')
    wish_authors = relationship('WishAuthor', back_populates='wish', cascade='all, delete-orphan')
    wish_series = relationship('WishSeries', back_populates='wish', uselist=False, cascade='all, delete-orphan')

    # Convenience relationship
    authors = relationship('Author', secondary='wishauthor', viewonly=True)
