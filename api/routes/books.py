# api/routes/books.py

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from librarian.errors import DuplicateBook, SeriesPositionTaken
from librarian.resolvers.book_creator import BookCreator
from librarian.sa.database import get_db
from librarian.sa.models import Book as BookModel, User
from librarian.sa.repositories.author import AuthorRepository
from librarian.sa.repositories.book import BookRepository
from librarian.utils.covers import CoverStore
from api.deps import get_cover_store, get_current_user
from api.schemas.book import AuthorBase, AuthorBooks, Book, BookForm, BookList, BookSummary, SeriesPositionSchema
from api.schemas.series import SeriesBase, Unread, UnreadGroup

router = APIRouter(tags=["books"])

def book_response(book: BookModel, covers: Optional[CoverStore] = None) -> Book:
    """Full book including its tags, series position and whether a cover is stored"""
    position = book.book_series
    response = Book.model_validate(book)
    if position is not None:
        response.series = SeriesPositionSchema(name=position.series.name, number=position.number)
        response.series_id = position.series_id
    if covers is not None:
        response.has_cover = covers.exists(book.owner_id, book.id)
    return response

def raise_conflict(e: ValueError):
    """Map a rejected write to an HTTP error"""
    if isinstance(e, (DuplicateBook, SeriesPositionTaken)):
        raise HTTPException(status_code=409, detail=str(e))
    raise HTTPException(status_code=400, detail=str(e))

@router.get("/", response_model=BookList)
def get_books(
    query: Optional[str] = Query(None, description="Search books by title"),
    page: int = Query(1, ge=1, description="Page number"),
    size: int = Query(50, ge=1, le=200, description="Items per page"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Get a paginated list of the user's books with optional title search.
    
    Args:
        query: Optional search string to filter books by title
        page: Page number (1-based)
        size: Number of items per page
    
    Returns:
        BookList ordered by title
    """
    repo = BookRepository(db)
    offset = (page - 1) * size
    books = repo.search_books(user.id, query=query, limit=size, offset=offset)
    total = repo.count_books(user.id, query=query)

    return BookList(
        items=[BookSummary.model_validate(book) for book in books],
        total=total,
        page=page,
        size=size
    )

@router.get("/book/{book_id}", response_model=Book)
def get_book(
    book_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    covers: CoverStore = Depends(get_cover_store)
):
    book = BookRepository(db).get_for_owner(book_id, user.id)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return book_response(book, covers)

@router.get("/book/{book_id}/edit", response_model=BookForm)
def get_book_form(
    book_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    covers: CoverStore = Depends(get_cover_store)
):
    """Get a book as editable fields, cover included"""
    book = BookRepository(db).get_for_owner(book_id, user.id)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return BookForm.from_details(BookCreator(db, covers).details_for(book))

@router.post("/book/{book_id}/edit", response_model=Book)
def edit_book(
    book_id: UUID,
    form: BookForm,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    covers: CoverStore = Depends(get_cover_store)
):
    """
    Replace a book's fields, authors, tags and series position.

    A form without a cover keeps the stored one.
    """
    try:
        book = BookCreator(db, covers).update_book(user, book_id, form.to_details())
    except ValueError as e:
        raise_conflict(e)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")

    book = BookRepository(db).get_for_owner(book.id, user.id)
    return book_response(book, covers)

@router.get("/images/{book_id}")
def get_cover(
    book_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    covers: CoverStore = Depends(get_cover_store)
):
    book = BookRepository(db).get_for_owner(book_id, user.id)
    data = covers.load(user.id, book.id) if book else None
    if data is None:
        raise HTTPException(status_code=404, detail="Cover not found")
    return Response(content=data, media_type="image/jpeg")

@router.get("/author/{author_id}", response_model=AuthorBooks)
def get_author(
    author_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get an author with the user's books, oldest first and undated before dated"""
    repo = AuthorRepository(db)
    author = repo.get_by_id(author_id)
    books = repo.get_books_for_owner(author_id, user.id) if author else []
    if not books:
        raise HTTPException(status_code=404, detail="Author not found")

    return AuthorBooks(
        author=AuthorBase.model_validate(author),
        books=[BookSummary.model_validate(book) for book in books]
    )

@router.get("/unread", response_model=Unread)
def get_unread(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the user's unread books grouped by series, books without a series first"""
    no_series, by_series = BookRepository(db).get_unread_by_series(user.id)

    groups = []
    if no_series:
        groups.append(UnreadGroup(books=[BookSummary.model_validate(b) for b in no_series]))
    for series, books in by_series.items():
        groups.append(UnreadGroup(
            series=SeriesBase.model_validate(series),
            books=[BookSummary.model_validate(b) for b in books]
        ))
    return Unread(groups=groups)
