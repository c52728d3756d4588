# api/routes/series.py

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from librarian.sa.database import get_db
from librarian.sa.models import User
from librarian.sa.repositories.series import SeriesRepository
from librarian.sa.repositories.user import UserRepository
from api.deps import get_current_user
from api.schemas.book import BookSummary
from api.schemas.series import (
    MissingVolumes, Ongoing, SeriesBase, SeriesBook, SeriesBooks, SeriesUpdate, SeriesWithCount
)

router = APIRouter(tags=["series"])

def ongoing_response(db: Session, owner_id: UUID) -> Ongoing:
    overview = SeriesRepository(db).ongoing_overview(owner_id)
    return Ongoing(
        missing=[
            MissingVolumes(series=SeriesBase.model_validate(series), missing=numbers)
            for series, numbers in overview.missing
        ],
        all_owned=[SeriesBase.model_validate(series) for series in overview.all_owned]
    )

@router.get("/series", response_model=List[SeriesWithCount])
def get_series_list(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the user's series with the number of owned books in each"""
    summaries = SeriesRepository(db).list_with_counts(user.id)
    return [
        SeriesWithCount(
            **SeriesBase.model_validate(summary.series).model_dump(),
            owned_count=summary.owned_count,
            complete=summary.complete
        )
        for summary in summaries
    ]

@router.get("/series/{series_id}", response_model=SeriesBooks)
def get_series(
    series_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    repo = SeriesRepository(db)
    series = repo.get_for_owner(series_id, user.id)
    if not series:
        raise HTTPException(status_code=404, detail="Series not found")

    return SeriesBooks(
        series=SeriesBase.model_validate(series),
        books=[
            SeriesBook(number=number, book=BookSummary.model_validate(book))
            for book, number in repo.get_books(series.id, user.id)
        ]
    )

@router.post("/series/{series_id}/edit", response_model=SeriesBase)
def edit_series(
    series_id: UUID,
    update: SeriesUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Rename a series, mark it ongoing or set its number of published volumes.

    Raises:
        HTTPException: 404 if the series is not the user's, 409 if the new
            name is used by another of the user's series
    """
    try:
        series = SeriesRepository(db).update_series(
            series_id,
            user.id,
            update.name,
            ongoing=update.ongoing,
            total_count=update.total_count
        )
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if not series:
        raise HTTPException(status_code=404, detail="Series not found")
    return series

@router.get("/ongoing", response_model=Ongoing)
def get_ongoing(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the volumes missing from the user's series, and the ongoing series they own fully"""
    return ongoing_response(db, user.id)

@router.get("/public/{user_id}/ongoing", response_model=Ongoing)
def get_public_ongoing(
    user_id: UUID,
    db: Session = Depends(get_db)
):
    """Same as /ongoing without login, for users who made the page public"""
    user = UserRepository(db).get_by_id(user_id)
    if not user or not user.public_ongoing:
        raise HTTPException(status_code=404, detail="Not found")
    return ongoing_response(db, user.id)
