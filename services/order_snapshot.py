"""
Order line snapshots.

Decides which name, price and size an order item records. The checkout
transaction only calls ``snapshot()``; swapping the policy changes how
lines are priced without touching the stock logic.

The storefront has always stored the price the customer saw in the
browser, unchecked against the catalogue. That stays the default policy;
CatalogPricedSnapshotPolicy re-prices from the products table instead.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from models.orderItem import OrderItemDTO
from models.payload import CheckoutLine
from repositories.product import ProductRepository


class OrderLineSnapshotPolicy:
    """Builds the OrderItem row for one checkout line."""

    async def snapshot(self, order_id: int, line: CheckoutLine, session: AsyncSession) -> OrderItemDTO:
        raise NotImplementedError


class ClientSubmittedSnapshotPolicy(OrderLineSnapshotPolicy):
    """Trusts the client: name, price and size are stored as submitted."""

    async def snapshot(self, order_id: int, line: CheckoutLine, session: AsyncSession) -> OrderItemDTO:
        return OrderItemDTO(
            order_id=order_id,
            product_id=line.id,
            product_name=line.name,
            price=line.price,
            quantity=line.quantity,
            size=line.size,
        )


class CatalogPricedSnapshotPolicy(OrderLineSnapshotPolicy):
    """
    Re-prices from the catalogue at order time.

    Falls back to the submitted values for products that no longer exist;
    the stock decrement rejects those lines anyway.
    """

    async def snapshot(self, order_id: int, line: CheckoutLine, session: AsyncSession) -> OrderItemDTO:
        product = await ProductRepository.get_by_id(line.id, session)
        if product is None:
            return await ClientSubmittedSnapshotPolicy().snapshot(order_id, line, session)
        return OrderItemDTO(
            order_id=order_id,
            product_id=product.id,
            product_name=product.name,
            price=product.price,
            quantity=line.quantity,
            size=line.size,
        )


DEFAULT_SNAPSHOT_POLICY: OrderLineSnapshotPolicy = ClientSubmittedSnapshotPolicy()
