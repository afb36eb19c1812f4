from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from models.product import Product, ProductDTO


class ProductRepository:

    @staticmethod
    async def get_all(session: AsyncSession) -> list[ProductDTO]:
        stmt = select(Product).order_by(Product.id.asc())
        products = await session_execute(stmt, session)
        return [ProductDTO.model_validate(product, from_attributes=True) for product in products.scalars().all()]

    @staticmethod
    async def get_by_id(product_id: int, session: AsyncSession) -> ProductDTO | None:
        stmt = select(Product).where(Product.id == product_id)
        product = await session_execute(stmt, session)
        product = product.scalar()
        if product is None:
            return None
        return ProductDTO.model_validate(product, from_attributes=True)

    @staticmethod
    async def get_ids_by_names(names: list[str], session: AsyncSession) -> dict[str, int]:
        """
        Batch resolve product names to IDs.

        Names are not unique in the catalogue; the lowest ID wins, which is
        what a single ``SELECT id ... WHERE name = ?`` would return first.

        Args:
            names: Product names as submitted by the client
            session: Database session

        Returns:
            Dict mapping name -> product_id for names that exist
        """
        if not names:
            return {}

        stmt = (
            select(Product.name, func.min(Product.id))
            .where(Product.name.in_(set(names)))
            .group_by(Product.name)
        )
        result = await session_execute(stmt, session)
        return {row[0]: row[1] for row in result.all()}

    @staticmethod
    async def get_existing_names(names: list[str], session: AsyncSession) -> set[str]:
        if not names:
            return set()
        stmt = select(Product.name).where(Product.name.in_(set(names)))
        result = await session_execute(stmt, session)
        return set(result.scalars().all())

    @staticmethod
    async def decrement_stock(product_id: int, quantity: int, session: AsyncSession) -> bool:
        """
        Atomically take ``quantity`` units from stock if enough are left.

        The check and the write are one UPDATE, so concurrent checkouts on
        the same product cannot both pass the check. The database holds the
        row lock until the surrounding transaction ends.

        Returns:
            True if the row was updated, False if stock was insufficient
            or the product does not exist
        """
        stmt = (
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        result = await session_execute(stmt, session)
        return result.rowcount > 0

    @staticmethod
    async def bulk_create(products: list[ProductDTO], session: AsyncSession) -> list[int]:
        entities = [Product(**product.model_dump(exclude_none=True)) for product in products]
        session.add_all(entities)
        await session_flush(session)
        return [entity.id for entity in entities]
