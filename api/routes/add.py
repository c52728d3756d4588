# api/routes/add.py
"""The add-book flow.

The barcode scanner sends the user to ``GET /add?isbn=...&provider=...``. The
lookup answers with whatever the provider knows so the user can complete the
form before it is posted back to ``POST /add``.
"""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from librarian.config import Config, get_config
from librarian.errors import ProviderLookupFailed
from librarian.metadata.providers import fetch_metadata
from librarian.metadata.types import BookDetails, MetadataProvider
from librarian.resolvers.book_creator import BookCreator
from librarian.sa.database import get_db
from librarian.sa.models import User
from librarian.sa.repositories import AuthorRepository, BookRepository, SeriesRepository, TagRepository
from librarian.utils.covers import CoverStore
from librarian.utils.isbn import normalize_isbn
from api.deps import get_cover_store, get_current_user
from api.routes.books import book_response, raise_conflict
from api.schemas.add import AddForm, Completions, LookupStatus, ProviderOption
from api.schemas.book import Book, BookForm

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/add", tags=["add"])

@router.get("", response_model=AddForm)
def lookup_book(
    isbn: Optional[str] = Query(None, description="ISBN to look up"),
    provider: Optional[MetadataProvider] = Query(None, description="Metadata provider to ask"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    config: Config = Depends(get_config)
):
    """
    Prepare the add-book form for an ISBN.

    Args:
        isbn: ISBN to look up, hyphens and spaces are ignored
        provider: Provider to ask, the configured default when missing

    Returns:
        AddForm whose status tells whether the book was found, is already in
        the library, or must be entered by hand
    """
    providers = config.metadata.available_providers()
    if provider is not None and provider not in providers:
        raise HTTPException(status_code=400, detail=f"Provider '{provider.value}' is not enabled")

    default_provider = config.metadata.pick_default() if providers else None
    provider = provider or default_provider

    form = AddForm(
        status=LookupStatus.EMPTY,
        provider=provider,
        providers=[ProviderOption(id=p, name=p.display_name) for p in providers],
        default_provider=default_provider,
        details=BookForm(),
        completions=Completions(
            authors=AuthorRepository(db).list_names_for_owner(user.id),
            tags=TagRepository(db).list_names_for_owner(user.id),
            series=SeriesRepository(db).list_names_for_owner(user.id)
        )
    )

    isbn = normalize_isbn(isbn or "")
    if not isbn:
        return form
    form.isbn = isbn
    form.details = BookForm(isbn=isbn)

    existing = BookRepository(db).get_by_isbn(user.id, isbn)
    if existing:
        form.status = LookupStatus.ALREADY_EXISTS
        form.existing_book_id = existing.id
        form.message = f"'{existing.title}' is already in your library"
        return form

    if provider is None:
        form.status = LookupStatus.MANUAL
        return form

    try:
        details = fetch_metadata(config, isbn, provider)
    except ProviderLookupFailed as e:
        logger.error(f"Lookup of {isbn} failed: {e}")
        form.status = LookupStatus.LOOKUP_FAILED
        form.message = str(e)
        return form

    if details is None:
        form.status = LookupStatus.NOT_FOUND
        form.message = f"No book with ISBN {isbn} found on {provider.display_name}"
        return form

    # Keep the scanned ISBN when the provider reports another form of it
    details.isbn = details.isbn or isbn
    form.status = LookupStatus.FOUND
    form.details = BookForm.from_details(details)
    return form

@router.post("", response_model=Book, status_code=201)
def add_book(
    form: BookForm,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    covers: CoverStore = Depends(get_cover_store)
):
    """
    Add a book to the user's library.

    Raises:
        HTTPException: 409 if the ISBN is already in the library or the series
            position is taken, 400 if the ISBN or title is missing
    """
    try:
        details: BookDetails = form.to_details()
        book = BookCreator(db, covers).create_book(user, details)
    except ValueError as e:
        raise_conflict(e)

    book = BookRepository(db).get_for_owner(book.id, user.id)
    return book_response(book, covers)
