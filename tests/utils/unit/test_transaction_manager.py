"""
Unit tests for TransactionManager.atomic().
"""

import pytest

from models.product import ProductDTO
from repositories.product import ProductRepository
from utils.transaction_manager import TransactionManager


class TestAtomic:

    @pytest.mark.asyncio
    async def test_commits_on_success(self, test_session_maker):
        async with test_session_maker() as session:
            async with TransactionManager.atomic(session):
                await ProductRepository.bulk_create([ProductDTO(name="Scarf", price=9.0, stock=3)], session)
            assert not session.in_transaction()

        async with test_session_maker() as session:
            assert await ProductRepository.get_existing_names(["Scarf"], session) == {"Scarf"}

    @pytest.mark.asyncio
    async def test_rolls_back_and_reraises(self, test_session_maker):
        async with test_session_maker() as session:
            with pytest.raises(RuntimeError, match="boom"):
                async with TransactionManager.atomic(session):
                    await ProductRepository.bulk_create([ProductDTO(name="Scarf", price=9.0, stock=3)], session)
                    raise RuntimeError("boom")

        async with test_session_maker() as session:
            assert await ProductRepository.get_existing_names(["Scarf"], session) == set()

    @pytest.mark.asyncio
    async def test_session_usable_after_rollback(self, test_session_maker, products):
        async with test_session_maker() as session:
            with pytest.raises(RuntimeError):
                async with TransactionManager.atomic(session):
                    raise RuntimeError("boom")

            async with TransactionManager.atomic(session):
                assert await ProductRepository.decrement_stock(products["Denim Jacket"].id, 1, session) is True

        async with test_session_maker() as session:
            assert (await ProductRepository.get_by_id(products["Denim Jacket"].id, session)).stock == 1
