# librarian/sa/models/user.py
import uuid
from sqlalchemy import Boolean, Text, Uuid, false
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base

class User(Base):
    __tablename__ = 'users'

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    public_ongoing: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    # Relationships
    books = relationship('Book', back_populates='user')
    series = relationship('Series', back_populates='user')
    wishes = relationship('Wish', back_populates='user')
