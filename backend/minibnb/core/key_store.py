# backend/minibnb/core/key_store.py
"""
String-keyed, TTL-aware key/value stores used by the response cache.

Two implementations share the same narrow contract:
- RedisKeyStore wraps a redis.asyncio client (production)
- InMemoryKeyStore keeps entries in a dict (tests, local development)

Values are already-serialized JSON strings; expiry is enforced by the store.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import fnmatch
import logging
from typing import Dict, List, Optional, Protocol, Tuple, runtime_checkable

from redis.asyncio import Redis as AsyncRedis

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyStore(Protocol):
    """Minimal key/value contract consumed by CacheService and ReadThroughCache."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set_ex(self, key: str, ttl_seconds: int, value: str) -> None:
        ...

    async def delete(self, *keys: str) -> int:
        ...

    async def keys(self, pattern: str) -> List[str]:
        ...

    async def close(self) -> None:
        ...


class RedisKeyStore:
    """KeyStore backed by a shared redis.asyncio client (decode_responses=True)."""

    def __init__(self, client: AsyncRedis) -> None:
        self.client = client

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def set_ex(self, key: str, ttl_seconds: int, value: str) -> None:
        await self.client.setex(key, ttl_seconds, value)

    async def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        return int(await self.client.delete(*keys))

    async def keys(self, pattern: str) -> List[str]:
        """Enumerate matching keys with SCAN so large keyspaces don't block Redis."""
        return [key async for key in self.client.scan_iter(match=pattern)]

    async def close(self) -> None:
        await self.client.aclose()


class InMemoryKeyStore:
    """
    Process-local KeyStore with lazy expiry.

    Glob matching uses fnmatch, which follows the same `*`, `?` and `[...]`
    rules Redis applies to KEYS/SCAN patterns.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Tuple[str, datetime]] = {}

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)

    def _purge_expired(self) -> None:
        now = self._now()
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at <= self._now():
            del self._entries[key]
            return None
        return value

    async def set_ex(self, key: str, ttl_seconds: int, value: str) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._entries[key] = (value, self._now() + timedelta(seconds=ttl_seconds))

    async def delete(self, *keys: str) -> int:
        deleted = 0
        for key in keys:
            if self._entries.pop(key, None) is not None:
                deleted += 1
        return deleted

    async def keys(self, pattern: str) -> List[str]:
        self._purge_expired()
        return [key for key in self._entries if fnmatch.fnmatchcase(key, pattern)]

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        self._purge_expired()
        return len(self._entries)
