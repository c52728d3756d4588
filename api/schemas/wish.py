# api/schemas/wish.py
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict

from api.schemas.book import AuthorBase, Name, SeriesPositionSchema

class Wish(BaseModel):
    id: UUID
    name: str
    authors: List[AuthorBase] = []
    series: Optional[SeriesPositionSchema] = None
    
    model_config = ConfigDict(from_attributes=True)

class WishCreate(BaseModel):
    name: Name
    authors: List[str] = []
    series: Optional[SeriesPositionSchema] = None
