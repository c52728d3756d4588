# api/routes/wishlist.py

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from librarian.errors import SeriesPositionTaken
from librarian.sa.database import get_db
from librarian.sa.models import User, Wish as WishModel
from librarian.sa.repositories.wish import WishRepository
from api.deps import get_current_user
from api.schemas.book import AuthorBase, SeriesPositionSchema
from api.schemas.wish import Wish, WishCreate

router = APIRouter(prefix="/wishlist", tags=["wishlist"])

def wish_response(wish: WishModel) -> Wish:
    position = wish.wish_series
    return Wish(
        id=wish.id,
        name=wish.name,
        authors=[AuthorBase.model_validate(a) for a in wish.authors],
        series=SeriesPositionSchema(name=position.series.name, number=position.number) if position else None
    )

@router.get("", response_model=List[Wish])
def get_wishlist(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return [wish_response(wish) for wish in WishRepository(db).list_wishes(user.id)]

@router.post("", response_model=Wish, status_code=201)
def add_wish(
    wish: WishCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Add a book the user wants to the wishlist.

    Raises:
        HTTPException: 409 if another wish has the same series position
    """
    try:
        created = WishRepository(db).create_wish(
            user.id,
            wish.name,
            authors=wish.authors,
            series_name=wish.series.name if wish.series else None,
            number=wish.series.number if wish.series else None
        )
    except SeriesPositionTaken as e:
        raise HTTPException(status_code=409, detail=str(e))
    return wish_response(created)

@router.delete("/{wish_id}", status_code=204)
def delete_wish(
    wish_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    if not WishRepository(db).delete_wish(wish_id, user.id):
        raise HTTPException(status_code=404, detail="Wish not found")
    return Response(status_code=204)
