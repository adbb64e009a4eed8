"""
cache.py — Session storage backends for Law2Ledger.

Namespace conventions:
  session:{session_id}       → DashboardSession JSON       TTL 24h (86400s)

Design:
  - Uses redis.asyncio (async client, part of redis-py 5.x) when SESSION_BACKEND=redis
  - SESSION_BACKEND=memory (default) uses InMemoryRedis, an in-process store that
    speaks the same get / setex / delete subset, so the helpers below work
    unchanged against either backend
  - Client created once in lifespan, stored on app.state.session_client
  - Helper functions take the client as a param — no module-level global state
  - Logs only session_id (not data values)
"""
import json
import logging
import time
from typing import Callable, Optional, Union

import redis.asyncio as aioredis

from law2ledger.config import settings

logger = logging.getLogger(__name__)

SESSION_PREFIX = "session"


def make_session_key(session_id: str) -> str:
    """Build the key for one dashboard session: session:{session_id}"""
    return f"{SESSION_PREFIX}:{session_id}"


# ---------------------------------------------------------------------------
# In-process backend
# ---------------------------------------------------------------------------

class InMemoryRedis:
    """
    Minimal in-process stand-in for the three Redis commands the session
    helpers use. Expired keys are dropped on read and swept on every write;
    at maxsize the key closest to expiry is evicted first.
    Data is lost when the process exits.
    """

    def __init__(
        self,
        maxsize: int = 10_000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.maxsize = maxsize
        self._clock = clock
        self._data: dict[str, tuple[float, str]] = {}

    def _sweep(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._data.items() if now >= expires_at]
        for key in expired:
            del self._data[key]
        if expired:
            logger.debug("Swept %d expired sessions", len(expired))

    async def ping(self) -> bool:
        return True

    async def dbsize(self) -> int:
        return len(self._data)

    async def get(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def setex(self, key: str, ttl: int, value: str) -> bool:
        now = self._clock()
        self._sweep(now)
        if key not in self._data and len(self._data) >= self.maxsize:
            oldest = min(self._data, key=lambda k: self._data[k][0])
            del self._data[oldest]
            logger.warning("Session store full, evicted key=%s", oldest)
        self._data[key] = (now + ttl, value)
        return True

    async def delete(self, key: str) -> int:
        entry = self._data.pop(key, None)
        return 1 if entry is not None and self._clock() < entry[0] else 0

    async def aclose(self) -> None:
        self._data.clear()


SessionClient = Union[aioredis.Redis, InMemoryRedis]


# ---------------------------------------------------------------------------
# Client factory: called once in lifespan
# ---------------------------------------------------------------------------

async def create_redis_pool() -> aioredis.Redis:
    """
    Create and return an async Redis connection pool.
    Verifies connectivity with PING before returning.
    """
    client = aioredis.from_url(
        settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=20,
    )
    await client.ping()
    logger.info("Redis connection pool established at %s", settings.redis_url)
    return client


async def create_session_client() -> SessionClient:
    """Pick the session backend from settings.session_backend."""
    if settings.session_backend == "redis":
        return await create_redis_pool()
    logger.info("Using in-process session store")
    return InMemoryRedis(maxsize=settings.session_store_maxsize)


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------

async def get_session_data(client: SessionClient, session_id: str) -> Optional[dict]:
    """
    Retrieve a stored session dict.
    Returns None if the session expired or never existed.
    """
    raw = await client.get(make_session_key(session_id))
    if raw is None:
        return None
    return json.loads(raw)


async def set_session_data(client: SessionClient, session_id: str, data: dict) -> None:
    """
    Store a session dict with the configured TTL.
    Overwrites the existing value and resets the TTL on every write.
    """
    ttl = settings.session_ttl_seconds
    await client.setex(make_session_key(session_id), ttl, json.dumps(data))
    logger.info("Session data updated session_id=%s ttl=%ds", session_id, ttl)


async def delete_session_data(client: SessionClient, session_id: str) -> bool:
    removed = await client.delete(make_session_key(session_id))
    logger.info("Session data deleted session_id=%s removed=%s", session_id, bool(removed))
    return bool(removed)
