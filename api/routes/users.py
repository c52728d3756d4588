# api/routes/users.py

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from librarian.sa.database import get_db
from librarian.sa.models import User as UserModel
from librarian.sa.repositories.user import UserRepository
from api.deps import get_current_user
from api.schemas.user import ProfileUpdate, User

router = APIRouter(prefix="/profile", tags=["users"])

@router.get("", response_model=User)
def get_profile(user: UserModel = Depends(get_current_user)):
    return user

@router.post("", response_model=User)
def update_profile(
    update: ProfileUpdate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Choose whether /public/{user_id}/ongoing can be seen without login"""
    return UserRepository(db).set_public_ongoing(user.id, update.public_ongoing)
