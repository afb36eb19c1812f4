"""
Client payloads.

Request bodies as the storefront sends them. Every field has an empty
default and explicit JSON nulls are treated as missing, so an absent field
reaches the service as "" or 0 and fails there with the service's own
message instead of a generic schema error.

Cart and checkout lines are coerced leniently: a line field that cannot be
read as its type becomes empty, and the service skips that line instead of
rejecting the whole request.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def lenient_int(value, default=None):
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else default
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def lenient_float(value, default=0.0):
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default


def lenient_str(value):
    return value if isinstance(value, str) else ''


class ClientPayload(BaseModel):
    model_config = ConfigDict(extra='ignore')

    @model_validator(mode='before')
    @classmethod
    def drop_nulls(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class RegisterPayload(ClientPayload):
    username: str = ''
    email: str = ''
    password: str = ''


class LoginPayload(ClientPayload):
    username: str = ''
    password: str = ''


class ContactPayload(ClientPayload):
    name: str = ''
    email: str = ''
    number: str = ''
    message: str = ''


class CartSyncItem(ClientPayload):
    name: str = ''
    size: str = ''
    quantity: int = 1

    @field_validator('name', 'size', mode='before')
    @classmethod
    def text_or_empty(cls, value):
        return lenient_str(value)

    @field_validator('quantity', mode='before')
    @classmethod
    def quantity_or_zero(cls, value):
        return lenient_int(value, 0)


class SyncCartPayload(ClientPayload):
    cart: list[CartSyncItem] = Field(default_factory=list)

    @field_validator('cart', mode='before')
    @classmethod
    def objects_only(cls, value):
        if isinstance(value, list):
            return [item if isinstance(item, dict) else {} for item in value]
        return value


class FavoriteSyncItem(ClientPayload):
    name: str = ''

    @field_validator('name', mode='before')
    @classmethod
    def text_or_empty(cls, value):
        return lenient_str(value)


class SyncFavoritesPayload(ClientPayload):
    favorites: list[FavoriteSyncItem] = Field(default_factory=list)

    @field_validator('favorites', mode='before')
    @classmethod
    def objects_only(cls, value):
        if isinstance(value, list):
            return [item if isinstance(item, dict) else {} for item in value]
        return value


class CheckoutLine(ClientPayload):
    """
    One cart line as submitted at checkout.

    name, price and size are the values the customer saw; they are stored
    as the order item snapshot (see services/order_snapshot.py).
    """
    id: int | None = None
    name: str = ''
    price: float = 0.0
    quantity: int = 0
    size: str = ''

    @field_validator('name', 'size', mode='before')
    @classmethod
    def text_or_empty(cls, value):
        return lenient_str(value)

    @field_validator('id', mode='before')
    @classmethod
    def id_or_none(cls, value):
        return lenient_int(value)

    @field_validator('quantity', mode='before')
    @classmethod
    def quantity_or_zero(cls, value):
        return lenient_int(value, 0)

    @field_validator('price', mode='before')
    @classmethod
    def price_or_zero(cls, value):
        return lenient_float(value)


class CheckoutPayload(ClientPayload):
    cart: list[CheckoutLine] = Field(default_factory=list)
    user_name: str = ''
    contact_number: str = ''
    address: str = ''
    payment_method: str = ''
    total_amount: float = 0.0
    payment_info: Any = Field(default_factory=dict)

    @field_validator('cart', mode='before')
    @classmethod
    def objects_only(cls, value):
        if isinstance(value, list):
            return [item if isinstance(item, dict) else {} for item in value]
        return value
