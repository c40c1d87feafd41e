"""Conversation session storage.

A session is the officer's current state plus the visit record being
filled. At most one session exists per officer JID.

Two stores implement the same async protocol:
- InMemorySessionStore: process-local dict, lost on restart.
- RedisSessionStore: JSON in Redis with a TTL, shared across workers.

Both hand out copies, so a caller's modifications only become visible
after an explicit ``put``.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

import redis.asyncio as aioredis
from pydantic import BaseModel

from visitbot.models.enums import ConversationState
from visitbot.schemas.visit import PartialVisit

logger = logging.getLogger(__name__)


class ConversationSession(BaseModel):
    """An officer's in-progress conversation."""

    state: ConversationState
    visit: PartialVisit

    @property
    def user_id(self) -> str:
        return self.visit.user_id


class SessionStore(Protocol):
    """Keyed storage for at most one session per officer."""

    async def is_active(self, user_id: str) -> bool: ...

    async def get(self, user_id: str) -> ConversationSession | None: ...

    async def put(self, user_id: str, session: ConversationSession) -> None: ...

    async def remove(self, user_id: str) -> ConversationSession | None: ...


class InMemorySessionStore:
    """Dict-backed store guarded by a lock."""

    def __init__(self) -> None:
        self._sessions: dict[str, ConversationSession] = {}
        self._lock = threading.Lock()

    async def is_active(self, user_id: str) -> bool:
        with self._lock:
            return user_id in self._sessions

    async def get(self, user_id: str) -> ConversationSession | None:
        with self._lock:
            session = self._sessions.get(user_id)
        return session.model_copy(deep=True) if session is not None else None

    async def put(self, user_id: str, session: ConversationSession) -> None:
        with self._lock:
            self._sessions[user_id] = session.model_copy(deep=True)

    async def remove(self, user_id: str) -> ConversationSession | None:
        with self._lock:
            return self._sessions.pop(user_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


class RedisSessionStore:
    """Redis-backed store: one JSON string per officer with an expiry."""

    KEY_PREFIX = "visitbot:session:"

    def __init__(self, redis: aioredis.Redis, ttl_seconds: int = 86400) -> None:
        self._redis = redis
        self._ttl = ttl_seconds

    def _key(self, user_id: str) -> str:
        return f"{self.KEY_PREFIX}{user_id}"

    async def is_active(self, user_id: str) -> bool:
        return bool(await self._redis.exists(self._key(user_id)))

    async def get(self, user_id: str) -> ConversationSession | None:
        raw = await self._redis.get(self._key(user_id))
        if raw is None:
            return None
        return ConversationSession.model_validate_json(raw)

    async def put(self, user_id: str, session: ConversationSession) -> None:
        await self._redis.set(self._key(user_id), session.model_dump_json(), ex=self._ttl)

    async def remove(self, user_id: str) -> ConversationSession | None:
        raw = await self._redis.getdel(self._key(user_id))
        if raw is None:
            return None
        return ConversationSession.model_validate_json(raw)


def build_session_store(backend: str, redis: aioredis.Redis | None = None, ttl_seconds: int = 86400) -> SessionStore:
    """Pick the session store named by the ``SESSION_BACKEND`` setting."""
    if backend == "redis":
        if redis is None:
            msg = "Redis session backend selected but no Redis client given"
            raise ValueError(msg)
        logger.info("Using Redis session store (ttl=%ss)", ttl_seconds)
        return RedisSessionStore(redis, ttl_seconds=ttl_seconds)
    logger.info("Using in-memory session store")
    return InMemorySessionStore()
