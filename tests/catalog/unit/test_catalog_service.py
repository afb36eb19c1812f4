"""
Unit tests for CatalogService.get_products().
"""

import pytest

from enums.product_size import ProductSize
from services.catalog import CatalogService


class TestGetProducts:

    @pytest.mark.asyncio
    async def test_empty_catalogue(self, test_session):
        assert await CatalogService.get_products(test_session) == []

    @pytest.mark.asyncio
    async def test_products_ordered_by_id(self, test_session, products):
        result = await CatalogService.get_products(test_session)
        assert [p.id for p in result] == sorted(p.id for p in products.values())
        assert [p.name for p in result][:2] == ["Classic White Tee", "Denim Jacket"]

    @pytest.mark.asyncio
    async def test_product_shape(self, test_session, products):
        result = await CatalogService.get_products(test_session)
        tee = result[0].model_dump()

        assert tee == {
            "id": products["Classic White Tee"].id,
            "name": "Classic White Tee",
            "price": 19.99,
            "image": "images/white-tee.jpg",
            "category": "T-Shirts",
            "stock": 10,
            "sizes": ["S", "M", "L", "XL"],
        }
        assert isinstance(tee["price"], float)

    @pytest.mark.asyncio
    async def test_missing_image_is_empty_string(self, test_session, products):
        result = await CatalogService.get_products(test_session)
        beanie = next(p for p in result if p.name == "Wool Beanie")
        assert beanie.image == ""

    @pytest.mark.asyncio
    async def test_every_product_offers_all_sizes(self, test_session, products):
        result = await CatalogService.get_products(test_session)
        assert all(p.sizes == ProductSize.all_values() for p in result)
