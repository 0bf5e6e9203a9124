"""Practice-table sessions: signed tokens over a Redis or in-memory store."""

import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any
from uuid import uuid4

import redis.asyncio as redis
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from redis.exceptions import RedisError

from config import config

logger = logging.getLogger(__name__)


class SessionSigner:
    """Turns raw session ids into signed, time-limited tokens and back."""

    def __init__(self, secret_key: str | None = None) -> None:
        self._serializer = URLSafeTimedSerializer(secret_key or config.security.secret_key)

    def sign(self, session_id: str) -> str:
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Recover the session id carried by a token.

        Args:
            token: Token previously produced by ``sign``
            max_age: Oldest acceptable token in seconds (defaults to session_ttl)

        Returns:
            The session id, or None if the token is forged or too old
        """
        try:
            return self._serializer.loads(token, max_age=max_age or config.session_ttl)
        except (BadSignature, SignatureExpired):
            return None


_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Return the process-wide signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class SessionStore(ABC):
    """Where each session's practice table is kept between requests."""

    @abstractmethod
    async def get(self, session_id: str) -> dict[str, Any] | None:
        """Return the session's data, or None if it is unknown or expired."""

    @abstractmethod
    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        """Store the session's data, restarting its time to live."""


class InMemorySessionStore(SessionStore):
    """Single-process store used when Redis is not reachable."""

    def __init__(self) -> None:
        self._sessions: dict[str, tuple[dict[str, Any], float]] = {}

    async def get(self, session_id: str) -> dict[str, Any] | None:
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        data, expires_at = entry
        if expires_at <= time.time():
            del self._sessions[session_id]
            return None
        return data

    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        self._sessions[session_id] = (data, time.time() + (ttl or config.session_ttl))


class RedisSessionStore(SessionStore):
    """Sessions as JSON strings under expiring Redis keys."""

    key_prefix = "trainer:table:"

    def __init__(self, redis_client: redis.Redis) -> None:
        self._redis = redis_client

    async def get(self, session_id: str) -> dict[str, Any] | None:
        raw = await self._redis.get(self.key_prefix + session_id)
        return json.loads(raw) if raw is not None else None

    async def set(self, session_id: str, data: dict[str, Any], ttl: int | None = None) -> None:
        await self._redis.setex(self.key_prefix + session_id, ttl or config.session_ttl, json.dumps(data))


_session_store: SessionStore | None = None


async def get_session_store() -> SessionStore:
    """Connect to Redis once, falling back to process memory if that fails."""
    global _session_store
    if _session_store is not None:
        return _session_store

    redis_client = None
    try:
        redis_client = redis.from_url(config.redis.url)
        await redis_client.ping()
    except (RedisError, OSError, ValueError) as exc:
        logger.warning("Redis unavailable (%s); falling back to in-memory sessions", exc)
        if redis_client is not None:
            await redis_client.aclose()
        _session_store = InMemorySessionStore()
    else:
        logger.info("Using Redis session store at %s:%s", config.redis.host, config.redis.port)
        _session_store = RedisSessionStore(redis_client)
    return _session_store


async def create_session() -> str:
    """Register an empty session and return the signed token for it."""
    session_id = str(uuid4())
    await update_session(session_id, {})
    return get_session_signer().sign(session_id)


async def get_session(session_id: str) -> dict[str, Any] | None:
    store = await get_session_store()
    return await store.get(session_id)


async def update_session(session_id: str, data: dict[str, Any]) -> None:
    store = await get_session_store()
    await store.set(session_id, data)


def extract_session_id(token: str) -> str | None:
    """Verify a client's session token; None means it cannot be trusted."""
    return get_session_signer().unsign(token)
