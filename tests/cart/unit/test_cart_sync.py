"""
Unit Tests: CartService sync

Tests for services/cart.py covering:
- sync_cart() - wholesale replace, unknown products dropped, duplicates merged
- get_cart() - joined with current product data, guests get nothing
"""

import pytest

from exceptions import AuthError
from models.payload import CartSyncItem, SyncCartPayload
from repositories.cartItem import CartItemRepository
from services.cart import CartService


def line(name, size="M", quantity=1):
    return CartSyncItem(name=name, size=size, quantity=quantity)


class TestSyncCart:

    @pytest.mark.asyncio
    async def test_guest_rejected(self, test_session, products):
        with pytest.raises(AuthError) as exc_info:
            await CartService.sync_cart(None, [line("Denim Jacket")], test_session)
        assert exc_info.value.message == "User not authenticated."

    @pytest.mark.asyncio
    async def test_stores_known_products(self, test_session_maker, products, user):
        async with test_session_maker() as session:
            stored = await CartService.sync_cart(
                user, [line("Denim Jacket", "L", 2), line("Classic White Tee", "S")], session
            )
        assert stored == 2

        async with test_session_maker() as session:
            rows = await CartItemRepository.get_by_user_id(user.id, session)
        assert {(r.product_id, r.size, r.quantity) for r in rows} == {
            (products["Denim Jacket"].id, "L", 2),
            (products["Classic White Tee"].id, "S", 1),
        }

    @pytest.mark.asyncio
    async def test_unknown_and_invalid_lines_dropped(self, test_session_maker, products, user):
        items = [
            line("Denim Jacket"),
            line("Discontinued Hat"),
            line("Classic White Tee", size=""),
            line("Classic White Tee", quantity=0),
        ]
        async with test_session_maker() as session:
            assert await CartService.sync_cart(user, items, session) == 1

    @pytest.mark.asyncio
    async def test_uncoercible_lines_dropped(self, test_session_maker, products, user):
        payload = SyncCartPayload.model_validate({"cart": [
            {"name": "Denim Jacket", "size": "L", "quantity": "2"},
            {"name": "Wool Beanie", "size": "M", "quantity": "abc"},
            {"name": ["Classic White Tee"], "size": "M", "quantity": 1},
            {"name": "Classic White Tee", "size": {"label": "M"}, "quantity": 1},
            "Chino Trousers",
        ]})
        async with test_session_maker() as session:
            assert await CartService.sync_cart(user, payload.cart, session) == 1

        async with test_session_maker() as session:
            rows = await CartItemRepository.get_by_user_id(user.id, session)
        assert [(r.product_id, r.size, r.quantity) for r in rows] == [(products["Denim Jacket"].id, "L", 2)]

    @pytest.mark.asyncio
    async def test_duplicate_lines_merged(self, test_session_maker, products, user):
        items = [line("Denim Jacket", "M", 1), line("Denim Jacket", "M", 2), line("Denim Jacket", "L", 1)]
        async with test_session_maker() as session:
            assert await CartService.sync_cart(user, items, session) == 2

        async with test_session_maker() as session:
            rows = await CartItemRepository.get_by_user_id(user.id, session)
        assert sorted((r.size, r.quantity) for r in rows) == [("L", 1), ("M", 3)]

    @pytest.mark.asyncio
    async def test_sync_replaces_previous_cart(self, test_session_maker, products, user):
        async with test_session_maker() as session:
            await CartService.sync_cart(user, [line("Denim Jacket"), line("Wool Beanie")], session)
        async with test_session_maker() as session:
            await CartService.sync_cart(user, [line("Classic White Tee")], session)

        async with test_session_maker() as session:
            rows = await CartItemRepository.get_by_user_id(user.id, session)
        assert [r.product_id for r in rows] == [products["Classic White Tee"].id]

    @pytest.mark.asyncio
    async def test_sync_is_idempotent(self, test_session_maker, products, user):
        items = [line("Denim Jacket", "L", 2), line("Classic White Tee")]
        for _ in range(2):
            async with test_session_maker() as session:
                await CartService.sync_cart(user, items, session)

        async with test_session_maker() as session:
            assert await CartItemRepository.count_by_user_id(user.id, session) == 2

    @pytest.mark.asyncio
    async def test_empty_sync_clears_cart(self, test_session_maker, products, user):
        async with test_session_maker() as session:
            await CartService.sync_cart(user, [line("Denim Jacket")], session)
        async with test_session_maker() as session:
            assert await CartService.sync_cart(user, [], session) == 0
        async with test_session_maker() as session:
            assert await CartItemRepository.count_by_user_id(user.id, session) == 0


class TestGetCart:

    @pytest.mark.asyncio
    async def test_guest_gets_empty_list(self, test_session, products):
        assert await CartService.get_cart(None, test_session) == []

    @pytest.mark.asyncio
    async def test_entries_joined_with_products(self, test_session_maker, products, user):
        async with test_session_maker() as session:
            await CartService.sync_cart(user, [line("Denim Jacket", "XL", 2)], session)

        async with test_session_maker() as session:
            entries = await CartService.get_cart(user, session)

        assert [entry.model_dump() for entry in entries] == [{
            "id": products["Denim Jacket"].id,
            "name": "Denim Jacket",
            "price": 79.0,
            "image": "images/denim-jacket.jpg",
            "size": "XL",
            "quantity": 2,
        }]
