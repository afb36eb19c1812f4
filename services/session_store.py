"""
Session Store

Maps an opaque session token (carried in the browser cookie) to the
signed-in user. Backed by Redis so sessions survive restarts and are shared
between worker processes; each entry expires after ``ttl_seconds``.

Key layout:
    <key_prefix>:<token> -> {"user_id": 1, "username": "alice"}
"""

import json
import logging
import secrets

from redis.asyncio import Redis

from models.user import SessionUser

logger = logging.getLogger(__name__)


class SessionStore:
    TOKEN_BYTES = 32

    def __init__(self, redis: Redis, ttl_seconds: int, key_prefix: str = "session"):
        self.redis = redis
        self.ttl_seconds = ttl_seconds
        self.key_prefix = key_prefix

    def _key(self, token: str) -> str:
        return f"{self.key_prefix}:{token}"

    async def create(self, user: SessionUser) -> str:
        """
        Open a session for ``user``.

        Returns:
            Fresh URL-safe token to hand to the client as a cookie
        """
        token = secrets.token_urlsafe(self.TOKEN_BYTES)
        payload = json.dumps({"user_id": user.id, "username": user.username})
        await self.redis.set(self._key(token), payload, ex=self.ttl_seconds)
        logger.info(f"Session opened for user {user.id}")
        return token

    async def get(self, token: str | None) -> SessionUser | None:
        if not token:
            return None
        raw = await self.redis.get(self._key(token))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode('utf-8')
        try:
            data = json.loads(raw)
            return SessionUser(id=data["user_id"], username=data["username"])
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding unreadable session entry")
            await self.redis.delete(self._key(token))
            return None

    async def destroy(self, token: str | None) -> None:
        """Drop a session. Unknown or missing tokens are ignored."""
        if not token:
            return
        await self.redis.delete(self._key(token))
