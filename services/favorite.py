import logging

from sqlalchemy.ext.asyncio import AsyncSession

from exceptions import AuthError
from models.favoriteItem import FavoriteItemDTO, FavoriteEntryResponse
from models.user import SessionUser
from repositories.favoriteItem import FavoriteItemRepository
from repositories.product import ProductRepository
from utils.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)


class FavoriteService:

    @staticmethod
    async def sync_favorites(current_user: SessionUser | None, items: list, session: AsyncSession) -> int:
        """
        Replace the user's stored favorites with the client's copy.

        Same rules as CartService.sync_cart without size or quantity:
        unknown names are dropped and each product is stored at most once.

        Raises:
            AuthError: no signed-in user
        """
        if current_user is None:
            raise AuthError("User not authenticated.")

        names = [item.name for item in items if item.name]

        async with TransactionManager.atomic(session):
            product_ids = await ProductRepository.get_ids_by_names(names, session)

            unique_product_ids: list[int] = []
            for name in names:
                product_id = product_ids.get(name)
                if product_id is not None and product_id not in unique_product_ids:
                    unique_product_ids.append(product_id)

            favorite_items = [
                FavoriteItemDTO(user_id=current_user.id, product_id=product_id)
                for product_id in unique_product_ids
            ]
            await FavoriteItemRepository.delete_by_user_id(current_user.id, session)
            await FavoriteItemRepository.create_many(favorite_items, session)

        logger.info(f"Favorites synced for user {current_user.id}: {len(favorite_items)} rows")
        return len(favorite_items)

    @staticmethod
    async def get_favorites(current_user: SessionUser | None, session: AsyncSession) -> list[FavoriteEntryResponse]:
        if current_user is None:
            return []
        return await FavoriteItemRepository.get_entries_by_user_id(current_user.id, session)
