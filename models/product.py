from pydantic import BaseModel, field_validator
from sqlalchemy import Column, Integer, String, Numeric, CheckConstraint

from enums.product_size import ProductSize
from models.base import Base


class Product(Base):
    __tablename__ = 'products'

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    image_url = Column(String(500), nullable=True)
    category = Column(String(100), nullable=True)
    # Guarded by checkout's conditional decrement; never negative
    stock = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint('price >= 0', name='check_product_price_non_negative'),
        CheckConstraint('stock >= 0', name='check_product_stock_non_negative'),
    )


class ProductDTO(BaseModel):
    id: int | None = None
    name: str | None = None
    price: float | None = None
    image_url: str | None = None
    category: str | None = None
    stock: int | None = None

    @field_validator('price', mode='before')
    @classmethod
    def coerce_price(cls, v):
        """Numeric columns come back as Decimal; the API speaks float."""
        if v is None:
            return v
        return float(v)


class ProductResponse(BaseModel):
    """Catalogue entry in the shape the storefront renders."""
    id: int
    name: str
    price: float
    image: str
    category: str | None = None
    stock: int
    sizes: list[str]

    @classmethod
    def from_dto(cls, product: ProductDTO) -> 'ProductResponse':
        return cls(
            id=int(product.id),
            name=product.name,
            price=float(product.price or 0),
            image=product.image_url or '',
            category=product.category,
            stock=product.stock or 0,
            sizes=ProductSize.all_values(),
        )
