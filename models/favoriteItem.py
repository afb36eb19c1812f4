from pydantic import BaseModel
from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint

from models.base import Base


class FavoriteItem(Base):
    __tablename__ = "favorite_items"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)

    __table_args__ = (
        UniqueConstraint('user_id', 'product_id', name='uq_favorite_items_user_product'),
    )


class FavoriteItemDTO(BaseModel):
    id: int | None = None
    user_id: int | None = None
    product_id: int | None = None


class FavoriteEntryResponse(BaseModel):
    id: int
    name: str
    price: float
    image: str
    size: str
