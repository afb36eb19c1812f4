from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, Integer, String, Text, DateTime, func

from models.base import Base


# Append-only inbox for the storefront's contact form
class ContactMessage(Base):
    __tablename__ = 'contact_messages'

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    number = Column(String(50), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)


class ContactMessageDTO(BaseModel):
    id: int | None = None
    name: str | None = None
    email: str | None = None
    number: str | None = None
    message: str | None = None
    created_at: datetime | None = None
