from pydantic import BaseModel
from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint, UniqueConstraint

from models.base import Base


# Server-side mirror of a signed-in user's cart. The browser owns ordering
# and guest carts; rows here are replaced wholesale on every sync.
class CartItem(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    size = Column(String(20), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)

    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_cart_quantity_positive'),
        UniqueConstraint('user_id', 'product_id', 'size', name='uq_cart_items_user_product_size'),
    )


class CartItemDTO(BaseModel):
    id: int | None = None
    user_id: int | None = None
    product_id: int | None = None
    size: str | None = None
    quantity: int | None = None


class CartEntryResponse(BaseModel):
    """Cart line joined with current product data (not a snapshot)."""
    id: int
    name: str
    price: float
    image: str
    size: str
    quantity: int
