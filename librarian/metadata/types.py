# librarian/metadata/types.py
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class MetadataProvider(str, Enum):
    CALIBRE = "calibre"
    OPEN_LIBRARY = "openlibrary"

    @property
    def display_name(self) -> str:
        return {
            MetadataProvider.CALIBRE: "Calibre",
            MetadataProvider.OPEN_LIBRARY: "Open Library",
        }[self]


@dataclass
class SeriesPosition:
    name: str
    number: int


@dataclass
class BookDetails:
    """Book information as returned by a provider or entered by the user.

    Every field may be missing: providers fill what they know and the user
    completes the rest before the book is saved.
    """
    isbn: Optional[str] = None
    title: Optional[str] = None
    authors: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    summary: Optional[str] = None
    published: Optional[date] = None
    publisher: Optional[str] = None
    language: Optional[str] = None
    google_id: Optional[str] = None
    amazon_id: Optional[str] = None
    librarything_id: Optional[str] = None
    goodreads_id: Optional[str] = None
    page_count: Optional[int] = None
    cover: Optional[bytes] = None
    owned: bool = True
    read: bool = False
    series: Optional[SeriesPosition] = None
