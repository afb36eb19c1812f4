from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, ForeignKey, func, Enum as SQLEnum
from sqlalchemy.orm import relationship

from enums.payment_method import PaymentMethod
from models.base import Base


class Order(Base):
    __tablename__ = 'orders'

    id = Column(Integer, primary_key=True)
    # Set when a signed-in user checks out; guest orders stay anonymous
    user_id = Column(Integer, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    user_name = Column(String(255), nullable=False)
    contact_number = Column(String(50), nullable=False)
    address = Column(Text, nullable=False)
    payment_method = Column(
        SQLEnum(PaymentMethod, values_callable=lambda enum: [m.value for m in enum], name='payment_method'),
        nullable=False
    )
    # Opaque JSON blob as submitted by the payment form
    payment_info = Column(Text, nullable=True)
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=func.now(), nullable=False)

    items = relationship('OrderItem', back_populates='order', cascade='all, delete-orphan', passive_deletes=True)


class OrderDTO(BaseModel):
    id: int | None = None
    user_id: int | None = None
    user_name: str | None = None
    contact_number: str | None = None
    address: str | None = None
    payment_method: PaymentMethod | None = None
    payment_info: str | None = None  # JSON string
    total_amount: float | None = None
    created_at: datetime | None = None
