"""
Custom exceptions for the storefront API.

This module provides a hierarchy of custom exceptions for consistent error handling
throughout the application.

Exception Hierarchy:
--------------------
StorefrontException (base)
├── ValidationError
├── AuthError
├── ConflictError
├── ServerError
└── OrderException
    ├── InsufficientStockError
    └── CheckoutFailedError

Usage:
------
Services raise specific exceptions:
    raise InsufficientStockError(product_id=7, product_name="Linen Shirt", requested=3)

The API boundary catches StorefrontException and answers with the envelope:
    {"success": false, "message": str(e), "data": null}
"""

from .base import StorefrontException, ServerError
from .validation import ValidationError
from .user import AuthError, ConflictError
from .order import OrderException, InsufficientStockError, CheckoutFailedError

__all__ = [
    # Base
    'StorefrontException',
    'ServerError',

    # Input
    'ValidationError',

    # User
    'AuthError',
    'ConflictError',

    # Order
    'OrderException',
    'InsufficientStockError',
    'CheckoutFailedError',
]
