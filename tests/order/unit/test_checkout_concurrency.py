"""
Concurrency tests for checkout.

Simultaneous checkouts on separate sessions (separate SQLite connections)
must never oversell: the conditional stock decrement lets exactly as many
orders through as there are units in stock.
"""

import asyncio

import pytest

from exceptions import InsufficientStockError
from models.payload import CheckoutLine, CheckoutPayload
from repositories.order import OrderRepository
from repositories.product import ProductRepository
from services.checkout import CheckoutService


def beanie_order(product, quantity=1) -> CheckoutPayload:
    return CheckoutPayload(
        cart=[CheckoutLine(id=product.id, name=product.name, price=product.price, quantity=quantity, size="M")],
        user_name="Customer",
        contact_number="555-0100",
        address="Somewhere 1",
        payment_method="PayPal",
        total_amount=product.price * quantity,
    )


async def checkout_in_own_session(session_maker, payload):
    async with session_maker() as session:
        return await CheckoutService.checkout(payload, None, session)


class TestConcurrentCheckout:

    @pytest.mark.asyncio
    async def test_last_unit_sold_once(self, test_session_maker, products):
        beanie = products["Wool Beanie"]  # stock 1

        results = await asyncio.gather(
            checkout_in_own_session(test_session_maker, beanie_order(beanie)),
            checkout_in_own_session(test_session_maker, beanie_order(beanie)),
            return_exceptions=True,
        )

        successes = [r for r in results if isinstance(r, int)]
        failures = [r for r in results if isinstance(r, InsufficientStockError)]
        assert len(successes) == 1
        assert len(failures) == 1

        async with test_session_maker() as session:
            assert (await ProductRepository.get_by_id(beanie.id, session)).stock == 0
            assert await OrderRepository.get_all_count(session) == 1

    @pytest.mark.asyncio
    async def test_stock_never_negative_under_load(self, test_session_maker, products):
        jacket = products["Denim Jacket"]  # stock 2

        results = await asyncio.gather(
            *[checkout_in_own_session(test_session_maker, beanie_order(jacket)) for _ in range(5)],
            return_exceptions=True,
        )

        assert sum(isinstance(r, int) for r in results) == 2
        assert sum(isinstance(r, InsufficientStockError) for r in results) == 3

        async with test_session_maker() as session:
            assert (await ProductRepository.get_by_id(jacket.id, session)).stock == 0
            assert await OrderRepository.get_all_count(session) == 2
