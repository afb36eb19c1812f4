from sqlalchemy.ext.asyncio import AsyncSession

from models.product import ProductResponse
from repositories.product import ProductRepository


class CatalogService:

    @staticmethod
    async def get_products(session: AsyncSession) -> list[ProductResponse]:
        """All products by ascending ID, normalized for the storefront."""
        products = await ProductRepository.get_all(session)
        return [ProductResponse.from_dto(product) for product in products]
