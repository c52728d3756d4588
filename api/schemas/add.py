# api/schemas/add.py
from enum import Enum
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel

from librarian.metadata.types import MetadataProvider
from api.schemas.book import BookForm

class LookupStatus(str, Enum):
    EMPTY = "empty"                    # no ISBN given yet
    MANUAL = "manual"                  # lookups are disabled
    FOUND = "found"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    LOOKUP_FAILED = "lookup_failed"

class ProviderOption(BaseModel):
    id: MetadataProvider
    name: str

class Completions(BaseModel):
    authors: List[str] = []
    tags: List[str] = []
    series: List[str] = []

class AddForm(BaseModel):
    status: LookupStatus
    isbn: Optional[str] = None
    provider: Optional[MetadataProvider] = None
    providers: List[ProviderOption] = []
    default_provider: Optional[MetadataProvider] = None
    message: Optional[str] = None
    existing_book_id: Optional[UUID] = None
    details: BookForm
    completions: Completions
