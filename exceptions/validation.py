"""
Input validation exceptions.
"""

from .base import StorefrontException


class ValidationError(StorefrontException):
    """
    Raised when request input is missing or malformed.

    The message names the offending field so the storefront can show it
    directly.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, details={'field': field} if field else None)
        self.field = field
