"""
API router for the storefront.

A single entry point dispatches on the ``action`` query parameter, the way
the browser client calls it:

    GET  /api?action=get_products
    POST /api?action=login         {"username": "...", "password": "..."}

Every action answers with the ApiResponse envelope
``{"success": bool, "message": str, "data": ...}``. Service exceptions are
turned into ``success: false`` here; the message is the exception's
caller-safe text and any store details only go to the log.

Sessions:
- The session cookie is resolved into ``SessionUser | None`` once per
  request and passed explicitly to the services
- login sets the cookie, logout clears it
"""

import json
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Awaitable, Callable

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError as PayloadValidationError
from sqlalchemy.ext.asyncio import AsyncSession

import config
from exceptions import StorefrontException, ServerError, ValidationError
from models.payload import (
    RegisterPayload,
    LoginPayload,
    ContactPayload,
    SyncCartPayload,
    SyncFavoritesPayload,
    CheckoutPayload,
)
from models.user import SessionUser
from services.auth import AuthService
from services.cart import CartService
from services.catalog import CatalogService
from services.checkout import CheckoutService
from services.contact import ContactService
from services.favorite import FavoriteService
from services.session_store import SessionStore
from web.dependencies import get_db, get_session_store, get_session_token, resolve_current_user
from web.schemas import ApiResponse

logger = logging.getLogger(__name__)

api_router = APIRouter(tags=["api"])


def generate_correlation_id() -> str:
    """Generate unique correlation ID for request tracing."""
    return f"{datetime.now().strftime('%Y%m%d-%H%M%S')}-{uuid.uuid4().hex[:8]}"


@dataclass
class ActionContext:
    """Everything an action handler may touch for one request."""
    body: dict[str, Any]
    session: AsyncSession
    session_store: SessionStore
    current_user: SessionUser | None
    session_token: str | None
    response: Response
    correlation_id: str

    def parse(self, payload_cls: type[BaseModel]):
        try:
            return payload_cls.model_validate(self.body)
        except PayloadValidationError as e:
            logger.info(f"[{self.correlation_id}] Rejected payload: {e.error_count()} errors")
            raise ValidationError("Invalid request data.")


ActionHandler = Callable[[ActionContext], Awaitable[ApiResponse]]

ACTIONS: dict[str, ActionHandler] = {}

# Actions that read a JSON body; the rest ignore it
BODY_ACTIONS = {"register", "login", "sync_cart", "sync_favorites", "submit_contact", "checkout"}


def action(name: str):
    def decorator(handler: ActionHandler) -> ActionHandler:
        ACTIONS[name] = handler
        return handler
    return decorator


# ========================================================================
# Authentication
# ========================================================================

@action("register")
async def register(ctx: ActionContext) -> ApiResponse:
    payload = ctx.parse(RegisterPayload)
    await AuthService.register(payload.username, payload.email, payload.password, ctx.session)
    return ApiResponse.ok("Registration successful.")


@action("login")
async def login(ctx: ActionContext) -> ApiResponse:
    payload = ctx.parse(LoginPayload)
    user, token = await AuthService.login(payload.username, payload.password, ctx.session, ctx.session_store)

    # A fresh token per login; drop whatever session the browser came with
    if ctx.session_token:
        await AuthService.logout(ctx.session_token, ctx.session_store)

    ctx.response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        max_age=config.SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        secure=config.SESSION_COOKIE_SECURE,
        path="/",
    )
    return ApiResponse.ok("Login successful.", {"user": user.model_dump()})


@action("logout")
async def logout(ctx: ActionContext) -> ApiResponse:
    await AuthService.logout(ctx.session_token, ctx.session_store)
    ctx.response.delete_cookie(key=config.SESSION_COOKIE_NAME, path="/")
    return ApiResponse.ok("Logout successful.")


@action("get_session")
async def get_session(ctx: ActionContext) -> ApiResponse:
    user = AuthService.get_session(ctx.current_user)
    if user is None:
        return ApiResponse.ok("No active session.", {"user": None})
    return ApiResponse.ok("Session active.", {"user": user.model_dump()})


# ========================================================================
# Catalog, cart and favorites
# ========================================================================

@action("get_products")
async def get_products(ctx: ActionContext) -> ApiResponse:
    products = await CatalogService.get_products(ctx.session)
    return ApiResponse.ok(
        "Products loaded successfully from database.",
        [product.model_dump() for product in products]
    )


@action("sync_cart")
async def sync_cart(ctx: ActionContext) -> ApiResponse:
    payload = ctx.parse(SyncCartPayload)
    stored = await CartService.sync_cart(ctx.current_user, payload.cart, ctx.session)
    return ApiResponse.ok("Cart synced successfully.", {"stored": stored})


@action("get_cart")
async def get_cart(ctx: ActionContext) -> ApiResponse:
    if ctx.current_user is None:
        return ApiResponse.ok("Cart data for guest user.", [])
    entries = await CartService.get_cart(ctx.current_user, ctx.session)
    return ApiResponse.ok(
        "Cart data loaded successfully from database.",
        [entry.model_dump() for entry in entries]
    )


@action("sync_favorites")
async def sync_favorites(ctx: ActionContext) -> ApiResponse:
    payload = ctx.parse(SyncFavoritesPayload)
    stored = await FavoriteService.sync_favorites(ctx.current_user, payload.favorites, ctx.session)
    return ApiResponse.ok("Favorites synced successfully.", {"stored": stored})


@action("get_favorites")
async def get_favorites(ctx: ActionContext) -> ApiResponse:
    if ctx.current_user is None:
        return ApiResponse.ok("Favorite data for guest user.", [])
    entries = await FavoriteService.get_favorites(ctx.current_user, ctx.session)
    return ApiResponse.ok(
        "Favorite data loaded successfully from database.",
        [entry.model_dump() for entry in entries]
    )


# ========================================================================
# Contact form and checkout
# ========================================================================

@action("submit_contact")
async def submit_contact(ctx: ActionContext) -> ApiResponse:
    payload = ctx.parse(ContactPayload)
    await ContactService.submit_contact(payload.name, payload.email, payload.number, payload.message, ctx.session)
    return ApiResponse.ok("Message sent successfully. We will contact you soon.")


@action("checkout")
async def checkout(ctx: ActionContext) -> ApiResponse:
    payload = ctx.parse(CheckoutPayload)
    order_id = await CheckoutService.checkout(payload, ctx.current_user, ctx.session)
    return ApiResponse.ok("Order placed successfully! Thank you for your purchase.", {"order_id": order_id})


# ========================================================================
# Dispatcher
# ========================================================================

async def read_json_body(request: Request) -> dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise ValidationError("Invalid JSON data received.")
    if not isinstance(body, dict):
        raise ValidationError("Invalid JSON data received.")
    return body


def error_status(exc: StorefrontException) -> int:
    """
    HTTP status for a failed action.

    Business failures answer 200 with ``success: false`` (the client
    retries non-2xx responses); only server-side faults use 500.
    """
    if isinstance(exc, ServerError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_200_OK


@api_router.api_route("/api", methods=["GET", "POST"], response_model=ApiResponse)
@api_router.api_route("/api.php", methods=["GET", "POST"], response_model=ApiResponse, include_in_schema=False)
async def dispatch(
    request: Request,
    response: Response,
    action_name: str = Query("", alias="action"),
    session: AsyncSession = Depends(get_db),
    session_store: SessionStore = Depends(get_session_store),
    session_token: str | None = Depends(get_session_token),
):
    correlation_id = generate_correlation_id()

    handler = ACTIONS.get(action_name)
    if handler is None:
        logger.warning(f"[{correlation_id}] Unknown action '{action_name}'")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ApiResponse.fail("Invalid action specified.").model_dump()
        )

    logger.info(f"[{correlation_id}] {request.method} action={action_name}")

    try:
        body = await read_json_body(request) if action_name in BODY_ACTIONS and request.method != "GET" else {}
        current_user = await resolve_current_user(session_token, session_store)
        ctx = ActionContext(
            body=body,
            session=session,
            session_store=session_store,
            current_user=current_user,
            session_token=session_token,
            response=response,
            correlation_id=correlation_id,
        )
        return await handler(ctx)
    except StorefrontException as e:
        if e.details:
            logger.warning(f"[{correlation_id}] {action_name} failed: {e!r}")
        else:
            logger.info(f"[{correlation_id}] {action_name} failed: {e.message}")
        return JSONResponse(status_code=error_status(e), content=ApiResponse.fail(e.message).model_dump())
