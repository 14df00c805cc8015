"""
Key-value session storage with per-key expiry
"""
import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

import redis.asyncio as redis

from roomcraft.core.config import settings

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Storage contract used by AuthService"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Value for key, or None when missing or expired"""

    @abstractmethod
    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store value under key for ttl_seconds"""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove key; True when it existed"""

    @abstractmethod
    async def expire(self, key: str, ttl_seconds: int) -> bool:
        """Reset the time to live of an existing key"""

    @abstractmethod
    async def keys(self, prefix: str = "") -> List[str]:
        """Live keys starting with prefix"""

    async def close(self) -> None:
        return None


class InMemorySessionStore(SessionStore):
    """Process-local store, for development and tests"""

    def __init__(self):
        self._data: Dict[str, Tuple[str, float]] = {}

    def _live(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= time.monotonic():
            del self._data[key]
            return None
        return value

    async def get(self, key: str) -> Optional[str]:
        return self._live(key)

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, (_, expires_at) in self._data.items() if expires_at <= now]
        for key in expired:
            del self._data[key]

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        now = time.monotonic()
        # Keys that are never read again are only dropped here
        self._purge_expired(now)
        self._data[key] = (value, now + ttl_seconds)

    async def delete(self, key: str) -> bool:
        if self._live(key) is None:
            return False
        del self._data[key]
        return True

    async def expire(self, key: str, ttl_seconds: int) -> bool:
        value = self._live(key)
        if value is None:
            return False
        self._data[key] = (value, time.monotonic() + ttl_seconds)
        return True

    async def keys(self, prefix: str = "") -> List[str]:
        return [key for key in list(self._data) if key.startswith(prefix) and self._live(key) is not None]


class RedisSessionStore(SessionStore):
    """Store shared between workers through Redis"""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisSessionStore":
        return cls(redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def put(self, key: str, value: str, ttl_seconds: int) -> None:
        await self.client.set(key, value, ex=ttl_seconds)

    async def delete(self, key: str) -> bool:
        return bool(await self.client.delete(key))

    async def expire(self, key: str, ttl_seconds: int) -> bool:
        return bool(await self.client.expire(key, ttl_seconds))

    async def keys(self, prefix: str = "") -> List[str]:
        return [key async for key in self.client.scan_iter(match=f"{prefix}*")]

    async def close(self) -> None:
        await self.client.aclose()


def create_session_store(backend: Optional[str] = None) -> SessionStore:
    """Build the store named by settings.session_backend"""
    backend = (backend or settings.session_backend).lower()
    if backend == "redis":
        logger.info(f"Using Redis session store at {settings.redis_url}")
        return RedisSessionStore.from_url(settings.redis_url)
    if backend != "memory":
        raise ValueError(f"Unknown session backend: {backend}")
    logger.info("Using in-memory session store")
    return InMemorySessionStore()
