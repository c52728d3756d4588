# api/schemas/series.py
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from api.schemas.book import BookSummary, Name

class SeriesBase(BaseModel):
    id: UUID
    name: str
    ongoing: bool
    total_count: Optional[int] = None
    
    model_config = ConfigDict(from_attributes=True)

class SeriesWithCount(SeriesBase):
    owned_count: int
    complete: bool

class SeriesBook(BaseModel):
    number: int
    book: BookSummary

class SeriesBooks(BaseModel):
    series: SeriesBase
    books: List[SeriesBook]

class SeriesUpdate(BaseModel):
    name: Name
    ongoing: Optional[bool] = None
    total_count: Optional[int] = Field(default=None, ge=0)

class MissingVolumes(BaseModel):
    series: SeriesBase
    missing: List[int]

class Ongoing(BaseModel):
    missing: List[MissingVolumes]
    all_owned: List[SeriesBase]

class UnreadGroup(BaseModel):
    series: Optional[SeriesBase] = None
    books: List[BookSummary]

class Unread(BaseModel):
    groups: List[UnreadGroup]
