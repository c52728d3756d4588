# api/deps.py
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from librarian.config import Config, get_config
from librarian.sa.database import get_db
from librarian.sa.models import User
from librarian.sa.repositories.user import UserRepository
from librarian.utils.covers import CoverStore

def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    config: Config = Depends(get_config)
) -> User:
    """
    Get the user named by the authenticating reverse proxy.

    Users are created the first time the proxy hands us their name.

    Raises:
        HTTPException: 401 if the proxy did not set the user header
    """
    name = request.headers.get(config.auth.user_header, "").strip()
    if not name:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return UserRepository(db).get_or_create(name)

def get_cover_store(config: Config = Depends(get_config)) -> CoverStore:
    return CoverStore(config.metadata.image_dir)
