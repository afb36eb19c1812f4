"""
User and authentication exceptions.
"""

from .base import StorefrontException


class AuthError(StorefrontException):
    """
    Raised when a request needs a signed-in user or credentials are wrong.

    Unknown username and wrong password share one message.
    """

    def __init__(self, message: str = "User not authenticated."):
        super().__init__(message)


class ConflictError(StorefrontException):
    """Raised when registration hits an existing username or email."""

    def __init__(self, message: str = "Username or email already exists.", details: dict | None = None):
        super().__init__(message, details)
