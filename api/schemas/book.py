# api/schemas/book.py
import base64
from datetime import date
from typing import Annotated, List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from librarian.metadata.types import BookDetails, SeriesPosition

class AuthorBase(BaseModel):
    id: int
    name: str
    
    model_config = ConfigDict(from_attributes=True)

class TagBase(BaseModel):
    id: int
    name: str
    
    model_config = ConfigDict(from_attributes=True)

# Names of series and wishes, surrounding spaces do not count
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

class SeriesPositionSchema(BaseModel):
    name: Name
    number: int = Field(ge=0)
    
    model_config = ConfigDict(from_attributes=True)

class BookSummary(BaseModel):
    id: UUID
    isbn: str
    title: str
    published: Optional[date] = None
    owned: bool
    read: bool
    authors: List[AuthorBase] = []
    
    model_config = ConfigDict(from_attributes=True)

class BookList(BaseModel):
    items: List[BookSummary]
    total: int
    page: int
    size: int
    
    model_config = ConfigDict(from_attributes=True)

class Book(BookSummary):
    summary: str
    publisher: Optional[str] = None
    language: Optional[str] = None
    google_id: Optional[str] = None
    goodreads_id: Optional[str] = None
    amazon_id: Optional[str] = None
    librarything_id: Optional[str] = None
    page_count: Optional[int] = None
    tags: List[TagBase] = []
    series: Optional[SeriesPositionSchema] = None
    series_id: Optional[UUID] = None
    has_cover: bool = False

class AuthorBooks(BaseModel):
    author: AuthorBase
    books: List[BookSummary]

class BookForm(BaseModel):
    """Editable book fields, the cover as base64 encoded JPEG"""
    isbn: Optional[str] = None
    title: Optional[str] = None
    authors: List[str] = []
    tags: List[str] = []
    summary: Optional[str] = None
    published: Optional[date] = None
    publisher: Optional[str] = None
    language: Optional[str] = None
    google_id: Optional[str] = None
    amazon_id: Optional[str] = None
    librarything_id: Optional[str] = None
    goodreads_id: Optional[str] = None
    page_count: Optional[int] = Field(default=None, ge=0)
    cover: Optional[str] = None
    owned: bool = True
    read: bool = False
    series: Optional[SeriesPositionSchema] = None

    @classmethod
    def from_details(cls, details: BookDetails) -> "BookForm":
        data = {k: v for k, v in vars(details).items() if k not in ("cover", "series")}
        if details.cover:
            data["cover"] = base64.b64encode(details.cover).decode("ascii")
        if details.series is not None:
            data["series"] = SeriesPositionSchema(name=details.series.name, number=details.series.number)
        return cls(**data)

    def to_details(self) -> BookDetails:
        data = self.model_dump(exclude={"cover", "series"})
        if self.cover:
            data["cover"] = base64.b64decode(self.cover)
        if self.series is not None:
            data["series"] = SeriesPosition(name=self.series.name, number=self.series.number)
        return BookDetails(**data)
