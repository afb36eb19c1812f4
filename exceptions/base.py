"""
Base exception classes for the storefront API.
"""


class StorefrontException(Exception):
    """
    Base exception for all storefront service errors.

    Services raise subclasses of this; the API boundary turns any of them
    into a ``success: false`` envelope using ``message``. ``details`` carries
    operator context (entity IDs, underlying store errors) that is logged
    but never sent to the caller.

    Attributes:
        message: Human-readable error message, safe to show to the caller
        details: Optional dict with additional context
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation with context."""
        if self.details:
            details_str = ', '.join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class ServerError(StorefrontException):
    """Raised when storage fails in a way the caller cannot fix."""

    def __init__(self, message: str = "A server error occurred. Please try again later.",
                 details: dict | None = None):
        super().__init__(message, details)
