"""
FastAPI dependencies shared by the API routes.

Tests override ``get_db`` and ``get_session_store`` through
``app.dependency_overrides``.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

import config
from db import get_db_session
from models.user import SessionUser
from services.session_store import SessionStore


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with get_db_session() as session:
        yield session


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_session_token(request: Request) -> str | None:
    return request.cookies.get(config.SESSION_COOKIE_NAME)


async def resolve_current_user(token: str | None, session_store: SessionStore) -> SessionUser | None:
    """Turn the session cookie into the signed-in user, or None for guests."""
    return await session_store.get(token)
