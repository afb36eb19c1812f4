from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    """
    The one response envelope every action returns.

    ``data`` is the payload itself: lists are never wrapped in a second
    ``data`` key.
    """
    success: bool
    message: str
    data: list[Any] | dict[str, Any] | None = None

    @classmethod
    def ok(cls, message: str, data: list | dict | None = None) -> 'ApiResponse':
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str) -> 'ApiResponse':
        return cls(success=False, message=message, data=None)
