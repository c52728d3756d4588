# librarian/sa/models/book.py
import uuid
from datetime import date
from sqlalchemy import Boolean, Date, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid, false, true
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base

class BookAuthor(Base):
    __tablename__ = 'bookauthor'

    book_id: Mapped[uuid.UUID] = mapped_column('book', ForeignKey('book.id'), primary_key=True)
    author_id: Mapped[int] = mapped_column('author', ForeignKey('author.id'), primary_key=True)

    # Relationships
    book = relationship('Book', back_populates='book_authors')
    author = relationship('Author', back_populates='book_authors')

class BookTag(Base):
    __tablename__ = 'booktag'

    book_id: Mapped[uuid.UUID] = mapped_column('book', ForeignKey('book.id'), primary_key=True)
    tag_id: Mapped[int] = mapped_column('tag', ForeignKey('tag.id'), primary_key=True)

    # Relationships
    book = relationship('Book', back_populates='book_tags')
    tag = relationship('Tag', back_populates='book_tags')

class Book(Base):
    __tablename__ = 'book'

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID] = mapped_column('owner', ForeignKey('users.id'), nullable=False)
    isbn: Mapped[str] = mapped_column(String(17), nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    # Non required information
    published: Mapped[date | None] = mapped_column(Date, nullable=True)
    publisher: Mapped[str | None] = mapped_column(Text, nullable=True)
    language: Mapped[str | None] = mapped_column(Text, nullable=True)
    google_id: Mapped[str | None] = mapped_column('googleid', Text, nullable=True)
    goodreads_id: Mapped[str | None] = mapped_column('goodreadsid', Text, nullable=True)
    amazon_id: Mapped[str | None] = mapped_column('amazonid', Text, nullable=True)
    librarything_id: Mapped[str | None] = mapped_column('librarythingid', Text, nullable=True)
    page_count: Mapped[int | None] = mapped_column('pagecount', Integer, nullable=True)
    owned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=true())
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    # Relationships
    user = relationship('User', back_populates='books')
    book_authors = relationship('BookAuthor', back_populates='book', cascade='all, delete-orphan')
    book_tags = relationship('BookTag', back_populates='book', cascade='all, delete-orphan')
    book_series = relationship('BookSeries', back_populates='book', uselist=False, cascade='all, delete-orphan')

    # Convenience relationships
    authors = relationship('Author', secondary='bookauthor', viewonly=True)
    tags = relationship('Tag', secondary='booktag', viewonly=True)

    __table_args__ = (
        UniqueConstraint('owner', 'isbn', name='book_owner_isbn_key'),
    )
