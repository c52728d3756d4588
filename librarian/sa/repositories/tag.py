# librarian/sa/repositories/tag.py
import uuid
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from librarian.sa.models import Book, BookTag, Tag
from .base import clean_names, get_or_create_by_name

class TagRepository:
    """Repository for managing Tag entities."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_name(self, name: str) -> Optional[Tag]:
        """Get a tag by its name.
        
        Args:
            name: The name of the tag to retrieve
            
        Returns:
            The Tag object if found, None otherwise
        """
        return self.session.query(Tag).filter(Tag.name == name).first()

    def get_or_create(self, name: str) -> Tag:
        return get_or_create_by_name(self.session, Tag, name.strip())

    def get_or_create_many(self, names: Iterable[str]) -> List[Tag]:
        return [self.get_or_create(name) for name in clean_names(names)]

    def list_names_for_owner(self, owner_id: uuid.UUID) -> List[str]:
        """Get the names of the tags used on the owner's books.
        
        Args:
            owner_id: The user whose books are considered
            
        Returns:
            Sorted list of tag names
        """
        rows = (
            self.session.query(Tag.name)
            .join(BookTag, BookTag.tag_id == Tag.id)
            .join(Book, Book.id == BookTag.book_id)
            .filter(Book.owner_id == owner_id)
            .distinct()
            .order_by(Tag.name)
            .all()
        )
        return [name for (name,) in rows]
