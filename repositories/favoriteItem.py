from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from enums.product_size import FAVORITE_SIZE_LABEL
from models.favoriteItem import FavoriteItem, FavoriteItemDTO, FavoriteEntryResponse
from models.product import Product


class FavoriteItemRepository:
    @staticmethod
    async def delete_by_user_id(user_id: int, session: AsyncSession) -> int:
        stmt = delete(FavoriteItem).where(FavoriteItem.user_id == user_id)
        result = await session_execute(stmt, session)
        return result.rowcount

    @staticmethod
    async def create_many(favorite_items: list[FavoriteItemDTO], session: AsyncSession) -> None:
        for favorite_item_dto in favorite_items:
            session.add(FavoriteItem(**favorite_item_dto.model_dump(exclude_none=True)))
        await session_flush(session)

    @staticmethod
    async def get_entries_by_user_id(user_id: int, session: AsyncSession) -> list[FavoriteEntryResponse]:
        stmt = (
            select(Product.id, Product.name, Product.price, Product.image_url)
            .join(FavoriteItem, FavoriteItem.product_id == Product.id)
            .where(FavoriteItem.user_id == user_id)
            .order_by(FavoriteItem.id.asc())
        )
        result = await session_execute(stmt, session)
        return [
            FavoriteEntryResponse(
                id=int(product_id),
                name=name,
                price=float(price),
                image=image_url or '',
                size=FAVORITE_SIZE_LABEL,
            )
            for product_id, name, price, image_url in result.all()
        ]
