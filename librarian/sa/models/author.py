# librarian/sa/models/author.py
from sqlalchemy import Integer, Text
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base

class Author(Base):
    """Authors are shared between users and deduplicated by name"""
    __tablename__ = 'author'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    # Relationships
    book_authors = relationship('BookAuthor', back_populates='author')
    wish_authors = relationship('WishAuthor', back_populates='author')

    # Convenience relationships
    books = relationship('Book', secondary='bookauthor', viewonly=True)
    wishes = relationship('Wish', secondary='wishauthor', viewonly=True)
