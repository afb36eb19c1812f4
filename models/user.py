from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, Integer, String, DateTime, func

from models.base import Base


class User(Base):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    username = Column(String(50), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=func.now())


class UserDTO(BaseModel):
    id: int | None = None
    username: str | None = None
    email: str | None = None
    password_hash: str | None = None
    created_at: datetime | None = None


class PublicUserDTO(BaseModel):
    """User record safe to hand back to the browser (no password hash)."""
    id: int
    username: str
    email: str


class SessionUser(BaseModel):
    """Signed-in user resolved from the session cookie."""
    id: int
    username: str
