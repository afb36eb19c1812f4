import logging

from sqlalchemy.ext.asyncio import AsyncSession

from exceptions import AuthError
from models.cartItem import CartItemDTO, CartEntryResponse
from models.user import SessionUser
from repositories.cartItem import CartItemRepository
from repositories.product import ProductRepository
from utils.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)


class CartService:

    @staticmethod
    async def sync_cart(current_user: SessionUser | None, items: list, session: AsyncSession) -> int:
        """
        Replace the user's stored cart with the client's copy.

        Every existing row is deleted, then each client line naming a known
        product (non-empty size, quantity >= 1) is inserted. Products are
        matched by NAME, so a renamed product no longer matches; such lines
        are dropped silently as stale client state. Lines repeating the same
        product and size are merged by adding their quantities.

        Args:
            current_user: Signed-in user or None
            items: Client cart lines (CartSyncItem: name, size, quantity)
            session: Database session

        Returns:
            Number of rows stored

        Raises:
            AuthError: no signed-in user
        """
        if current_user is None:
            raise AuthError("User not authenticated.")

        valid_lines = [item for item in items if item.name and item.size and item.quantity >= 1]
        dropped = len(items) - len(valid_lines)

        async with TransactionManager.atomic(session):
            product_ids = await ProductRepository.get_ids_by_names([item.name for item in valid_lines], session)

            merged: dict[tuple[int, str], int] = {}
            for item in valid_lines:
                product_id = product_ids.get(item.name)
                if product_id is None:
                    logger.debug(f"Dropping cart line for unknown product '{item.name}'")
                    dropped += 1
                    continue
                key = (product_id, item.size)
                merged[key] = merged.get(key, 0) + item.quantity

            cart_items = [
                CartItemDTO(user_id=current_user.id, product_id=product_id, size=size, quantity=quantity)
                for (product_id, size), quantity in merged.items()
            ]
            await CartItemRepository.delete_by_user_id(current_user.id, session)
            await CartItemRepository.create_many(cart_items, session)

        logger.info(f"Cart synced for user {current_user.id}: {len(cart_items)} rows, {dropped} lines dropped")
        return len(cart_items)

    @staticmethod
    async def get_cart(current_user: SessionUser | None, session: AsyncSession) -> list[CartEntryResponse]:
        """Stored cart with current prices; guests always get an empty list."""
        if current_user is None:
            return []
        return await CartItemRepository.get_entries_by_user_id(current_user.id, session)
