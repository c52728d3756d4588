# librarian/sa/repositories/user.py
import uuid
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from librarian.sa.models import User

class UserRepository:
    """Repository for managing User entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.
        
        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_name(self, name: str) -> Optional[User]:
        return self.session.query(User).filter(User.name == name).first()

    def list_users(self) -> List[User]:
        return self.session.query(User).order_by(User.name).all()

    def create_user(self, name: str) -> User:
        """Create a new user.
        
        Args:
            name: The name of the user
            
        Returns:
            The created User object
            
        Raises:
            ValueError: If a user with the given name already exists
        """
        existing = self.get_by_name(name)
        if existing:
            raise ValueError(f"User with name '{name}' already exists")

        user = User(name=name)
        self.session.add(user)
        try:
            self.session.commit()
            return user
        except IntegrityError:
            self.session.rollback()
            raise ValueError(f"User with name '{name}' already exists")

    def get_or_create(self, name: str) -> User:
        """Get a user by name, creating it on first sight.

        Users are identified by the name the authenticating proxy hands us.
        """
        user = self.get_by_name(name)
        if user:
            return user
        try:
            return self.create_user(name)
        except ValueError:
            # Created concurrently by another request
            return self.get_by_name(name)

    def set_public_ongoing(self, user_id: uuid.UUID, public: bool) -> Optional[User]:
        """Choose whether the ongoing series page is visible without login.
        
        Returns:
            The updated User object if found, None otherwise
        """
        user = self.get_by_id(user_id)
        if not user:
            return None

        user.public_ongoing = public
        self.session.commit()
        return user
