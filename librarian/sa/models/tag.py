# librarian/sa/models/tag.py
from sqlalchemy import Integer, Text
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base

class Tag(Base):
    __tablename__ = 'tag'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    # Relationships
    book_tags = relationship('BookTag', back_populates='tag')

    # Convenience relationship
    books = relationship('Book', secondary='booktag', viewonly=True)
