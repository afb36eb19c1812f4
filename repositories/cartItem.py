from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from models.cartItem import CartItem, CartItemDTO, CartEntryResponse
from models.product import Product


class CartItemRepository:
    @staticmethod
    async def delete_by_user_id(user_id: int, session: AsyncSession) -> int:
        stmt = delete(CartItem).where(CartItem.user_id == user_id)
        result = await session_execute(stmt, session)
        return result.rowcount

    @staticmethod
    async def create_many(cart_items: list[CartItemDTO], session: AsyncSession) -> None:
        for cart_item_dto in cart_items:
            session.add(CartItem(**cart_item_dto.model_dump(exclude_none=True)))
        await session_flush(session)

    @staticmethod
    async def get_by_user_id(user_id: int, session: AsyncSession) -> list[CartItemDTO]:
        stmt = select(CartItem).where(CartItem.user_id == user_id).order_by(CartItem.id.asc())
        cart_items = await session_execute(stmt, session)
        return [CartItemDTO.model_validate(cart_item, from_attributes=True) for cart_item in cart_items.scalars().all()]

    @staticmethod
    async def get_entries_by_user_id(user_id: int, session: AsyncSession) -> list[CartEntryResponse]:
        """
        Cart rows joined with current product data.

        Price and image come from the catalogue as it is now, not from the
        moment the item was added.
        """
        stmt = (
            select(CartItem.size, CartItem.quantity, Product.id, Product.name, Product.price, Product.image_url)
            .join(Product, CartItem.product_id == Product.id)
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.id.asc())
        )
        result = await session_execute(stmt, session)
        return [
            CartEntryResponse(
                id=int(product_id),
                name=name,
                price=float(price),
                image=image_url or '',
                size=size,
                quantity=int(quantity),
            )
            for size, quantity, product_id, name, price, image_url in result.all()
        ]

    @staticmethod
    async def count_by_user_id(user_id: int, session: AsyncSession) -> int:
        stmt = select(func.count(CartItem.id)).where(CartItem.user_id == user_id)
        result = await session_execute(stmt, session)
        return result.scalar_one()
