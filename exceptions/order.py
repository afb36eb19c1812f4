"""
Checkout and order exceptions.
"""

from .base import StorefrontException


class OrderException(StorefrontException):
    """Base exception for checkout errors."""
    pass


class InsufficientStockError(OrderException):
    """Raised when a conditional stock decrement matched no row."""

    def __init__(self, product_id: int, product_name: str, requested: int):
        super().__init__(
            f"Insufficient stock for product: {product_name}",
            details={'product_id': product_id, 'product_name': product_name, 'requested': requested}
        )
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested


class CheckoutFailedError(OrderException):
    """
    Raised when the checkout transaction fails for any other storage reason.

    The underlying error text is kept in ``details['store_error']`` for the
    logs; the message itself stays generic.
    """

    def __init__(self, store_error: str | None = None):
        super().__init__(
            "Order failed. Please try again later.",
            details={'store_error': store_error} if store_error else None
        )
        self.store_error = store_error
