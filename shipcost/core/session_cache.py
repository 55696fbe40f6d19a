"""
Session-scoped key/value storage

Holds the Logsta auth token and the basket cost cache of one user session.
Entries never expire on their own; callers store expiry instants next to
values and check them explicitly.

Implementations:
- InMemorySessionCache: lock-guarded dict, one per session
- RedisSessionCache: per-session key namespace in Redis, JSON encoded values
"""
import json
import logging
import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, Dict, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from shipcost.core.config import settings

logger = logging.getLogger(__name__)


class SessionCache(ABC):
    """Key/value store owned by the calling session."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the stored value or None if absent."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store a value, overwriting any previous one."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a value if present."""
        pass


class InMemorySessionCache(SessionCache):
    """
    Session cache kept in process memory.

    Overlapping requests of the same session may read and write concurrently
    from different threads or tasks; every access holds the lock.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})
        self._lock = threading.Lock()

    async def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._data.get(key)

    async def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    async def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class RedisSessionCache(SessionCache):
    """
    Session cache stored in Redis under `session:<session_id>:<key>`.

    Every write sets the key to expire after ttl seconds, so abandoned
    sessions disappear from Redis. Entries are advisory: Redis failures are
    logged and read as a miss, which only costs a redundant estimate.
    """

    KEY_PREFIX = "session:"

    def __init__(self, client: redis.Redis, session_id: str, ttl: Optional[int] = None):
        self.client = client
        self.session_id = session_id
        self.ttl = ttl if ttl is not None else settings.SESSION_TTL_SECONDS

    def _key(self, key: str) -> str:
        return f"{self.KEY_PREFIX}{self.session_id}:{key}"

    async def get(self, key: str) -> Optional[Any]:
        try:
            data = await self.client.get(self._key(key))
        except RedisError as e:
            logger.warning(f"Redis session read failed for {key}: {e}")
            return None

        if data is None:
            return None

        try:
            return json.loads(data)
        except (TypeError, ValueError):
            logger.warning(f"Discarding undecodable session value for {key}")
            return None

    async def set(self, key: str, value: Any) -> None:
        try:
            await self.client.set(self._key(key), json.dumps(value), ex=self.ttl)
        except RedisError as e:
            logger.warning(f"Redis session write failed for {key}: {e}")

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(self._key(key))
        except RedisError as e:
            logger.warning(f"Redis session delete failed for {key}: {e}")


class SessionCacheRegistry:
    """
    In-memory session caches indexed by session id.

    Least recently used sessions are dropped once max_sessions is reached.
    """

    def __init__(self, max_sessions: int = 10000):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, InMemorySessionCache]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, session_id: str) -> InMemorySessionCache:
        with self._lock:
            cache = self._sessions.get(session_id)
            if cache is not None:
                self._sessions.move_to_end(session_id)
                return cache

            while len(self._sessions) >= self.max_sessions:
                self._sessions.popitem(last=False)
                logger.debug("Evicted oldest session cache (capacity)")

            cache = InMemorySessionCache()
            self._sessions[session_id] = cache
            return cache

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
