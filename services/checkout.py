import json
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from enums.payment_method import PaymentMethod
from exceptions import CheckoutFailedError, InsufficientStockError, ValidationError
from models.order import OrderDTO
from models.payload import CheckoutPayload, CheckoutLine
from models.user import SessionUser
from repositories.cartItem import CartItemRepository
from repositories.order import OrderRepository
from repositories.orderItem import OrderItemRepository
from repositories.product import ProductRepository
from services.order_snapshot import OrderLineSnapshotPolicy, DEFAULT_SNAPSHOT_POLICY
from utils.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)


class CheckoutService:

    @staticmethod
    def validate(payload: CheckoutPayload) -> PaymentMethod:
        """
        Check the order form in a fixed order, stopping at the first problem.

        Runs before any database work, so a rejected order never opens a
        transaction.

        Returns:
            The accepted payment method

        Raises:
            ValidationError: with a message naming the first missing or
                invalid field
        """
        if not payload.cart:
            raise ValidationError("Cart is empty.", field="cart")
        if not payload.user_name.strip():
            raise ValidationError("Name is required.", field="user_name")
        if not payload.contact_number.strip():
            raise ValidationError("Contact number is required.", field="contact_number")
        if not payload.address.strip():
            raise ValidationError("Address is required.", field="address")
        if not payload.payment_method.strip():
            raise ValidationError("Payment method is required.", field="payment_method")

        payment_method = PaymentMethod.from_client(payload.payment_method)
        if payment_method is None:
            raise ValidationError("Invalid payment method selected.", field="payment_method")
        return payment_method

    @staticmethod
    def _is_orderable(line: CheckoutLine) -> bool:
        return line.id is not None and line.id > 0 and line.quantity > 0

    @staticmethod
    async def checkout(
        payload: CheckoutPayload,
        current_user: SessionUser | None,
        session: AsyncSession,
        snapshot_policy: OrderLineSnapshotPolicy = DEFAULT_SNAPSHOT_POLICY
    ) -> int:
        """
        Place an order and take its items out of stock, all or nothing.

        Flow (one transaction):
        1. Insert the order (payment info stored as JSON) and get its ID
        2. For each line with a positive product ID and quantity:
           a. insert the order item snapshot
           b. decrement stock only where stock >= quantity
           c. no row updated -> roll back everything, InsufficientStockError
        3. Signed-in customer -> clear their stored cart
        4. Commit

        Lines without a positive product ID or quantity are skipped.

        Args:
            payload: Order form and cart lines from the client
            current_user: Signed-in user or None for guest checkout
            session: Database session (must not be inside a transaction)
            snapshot_policy: How order items record name and price

        Returns:
            ID of the new order

        Raises:
            ValidationError: order form incomplete or payment method unknown
            InsufficientStockError: a product ran out, nothing was written
            CheckoutFailedError: any other storage failure, nothing was written
        """
        payment_method = CheckoutService.validate(payload)

        order_dto = OrderDTO(
            user_id=current_user.id if current_user else None,
            user_name=payload.user_name.strip(),
            contact_number=payload.contact_number.strip(),
            address=payload.address.strip(),
            payment_method=payment_method,
            payment_info=json.dumps(payload.payment_info if payload.payment_info is not None else {}),
            total_amount=payload.total_amount,
        )

        try:
            async with TransactionManager.atomic(session):
                order_id = await OrderRepository.create(order_dto, session)

                items_count = 0
                for line in payload.cart:
                    if not CheckoutService._is_orderable(line):
                        continue

                    order_item = await snapshot_policy.snapshot(order_id, line, session)
                    await OrderItemRepository.create(order_item, session)

                    if not await ProductRepository.decrement_stock(line.id, line.quantity, session):
                        raise InsufficientStockError(
                            product_id=line.id,
                            product_name=line.name or f"#{line.id}",
                            requested=line.quantity
                        )
                    items_count += 1

                if current_user is not None:
                    await CartItemRepository.delete_by_user_id(current_user.id, session)
        except InsufficientStockError as e:
            logger.info(f"Checkout rejected: {e} (requested {e.requested})")
            raise
        except SQLAlchemyError as e:
            logger.error(f"❌ Checkout failed: {e}")
            raise CheckoutFailedError(store_error=str(e))

        logger.info(f"✅ Order {order_id} placed ({items_count} items, {payment_method.value})")
        return order_id
