# backend/minibnb/services/cache_service.py
"""
Cache Service for the MiniBnB platform.

Business-level cache control on top of a KeyStore:
- JSON get/set/delete with TTLs enforced by the store
- Pattern invalidation (one batched delete per pattern)
- The mapping from "what changed" to "which cached URL shapes are stale"

Unlike the read-through response cache, failures here are NOT swallowed:
a write whose invalidation fails must fail loudly rather than leave stale
reads behind it.
"""

import json
import logging
from typing import Any, List, Optional, Union

from fastapi import Request

from ..core.config import settings
from ..core.constants import CACHE_KEY_PREFIX
from ..core.exceptions import CacheInvalidationException
from ..core.key_store import KeyStore
from ..core.metrics import CACHE_INVALIDATED_KEYS_TOTAL
from .base import BaseService

logger = logging.getLogger(__name__)


class CacheKeyBuilder:
    """Standardized cache key and invalidation pattern generation."""

    def __init__(self, api_prefix: Optional[str] = None) -> None:
        self.api_prefix = settings.api_v1_prefix if api_prefix is None else api_prefix

    @staticmethod
    def for_url(path_with_query: str) -> str:
        """
        Key for a request URL, e.g. 'cache:/api/v1/listings?city=Paris'.

        The query string is used verbatim; differently ordered parameters
        produce distinct keys.
        """
        return f"{CACHE_KEY_PREFIX}{path_with_query}"

    def listing_detail_pattern(self, listing_id: Union[int, str]) -> str:
        return f"{CACHE_KEY_PREFIX}{self.api_prefix}/listings/{listing_id}*"

    def listing_collection_pattern(self) -> str:
        return f"{CACHE_KEY_PREFIX}{self.api_prefix}/listings?*"

    def listing_collection_key(self) -> str:
        return f"{CACHE_KEY_PREFIX}{self.api_prefix}/listings"

    def availability_pattern(self, listing_id: Union[int, str]) -> str:
        return f"{CACHE_KEY_PREFIX}{self.api_prefix}/listings/{listing_id}/availability*"


class CacheService(BaseService):
    """
    Cache control for writes.

    The KeyStore is injected; one instance is shared across requests.
    """

    def __init__(self, key_store: KeyStore, key_builder: Optional[CacheKeyBuilder] = None):
        super().__init__()
        self.key_store = key_store
        self.key_builder = key_builder or CacheKeyBuilder()

    # Core Cache Operations

    @BaseService.measure_operation("cache_get")
    async def get(self, key: str) -> Optional[Any]:
        """Deserialized value for key, or None on a miss."""
        raw = await self.key_store.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    @BaseService.measure_operation("cache_set")
    async def set(self, key: str, value: Any, ttl: int) -> None:
        await self.key_store.set_ex(key, ttl, json.dumps(value, default=str))

    @BaseService.measure_operation("cache_delete")
    async def delete(self, key: str) -> None:
        await self.key_store.delete(key)

    @BaseService.measure_operation("cache_invalidate_pattern")
    async def invalidate_pattern(self, pattern: str) -> int:
        """
        Delete every key matching a glob pattern.

        Matching keys are removed in a single batched delete; when nothing
        matches, no delete is sent.

        Raises:
            CacheInvalidationException: if the store fails
        """
        try:
            keys = await self.key_store.keys(pattern)
            if not keys:
                return 0
            await self.key_store.delete(*keys)
        except Exception as exc:
            logger.error("[CACHE] Invalidation failed for pattern %s: %s", pattern, exc)
            raise CacheInvalidationException(pattern, str(exc)) from exc

        logger.info("[CACHE] Deleted %d keys matching pattern: %s", len(keys), pattern)
        return len(keys)

    # Domain-Specific Invalidation

    async def _invalidate_all(self, patterns: List[str], scope: str) -> int:
        deleted = 0
        for pattern in patterns:
            deleted += await self.invalidate_pattern(pattern)
        CACHE_INVALIDATED_KEYS_TOTAL.labels(scope=scope).inc(deleted)
        return deleted

    @BaseService.measure_operation("invalidate_listing_cache")
    async def invalidate_listing_cache(self, listing_id: Union[int, str]) -> int:
        """Invalidate a listing's own views and every cached listing collection."""
        return await self._invalidate_all(
            [
                self.key_builder.listing_detail_pattern(listing_id),
                self.key_builder.listing_collection_pattern(),
                self.key_builder.listing_collection_key(),
            ],
            scope="listing",
        )

    @BaseService.measure_operation("invalidate_listing_collection_cache")
    async def invalidate_listing_collection_cache(self) -> int:
        """Invalidate cached listing collections only (new listing created)."""
        return await self._invalidate_all(
            [
                self.key_builder.listing_collection_pattern(),
                self.key_builder.listing_collection_key(),
            ],
            scope="collection",
        )

    @BaseService.measure_operation("invalidate_booking_cache")
    async def invalidate_booking_cache(self, listing_id: Union[int, str]) -> int:
        """
        Invalidate views derived from a listing's bookings.

        Covers the listing's availability responses and the collection
        responses, which filter out listings booked over a date range.
        """
        return await self._invalidate_all(
            [
                self.key_builder.availability_pattern(listing_id),
                self.key_builder.listing_collection_pattern(),
                self.key_builder.listing_collection_key(),
            ],
            scope="booking",
        )


def get_cache_service(request: Request) -> CacheService:
    """FastAPI dependency returning the app-scoped CacheService."""
    return request.app.state.cache_service
