# backend/minibnb/core/cache_redis.py
"""
Async Redis client factory for key-value caching.

A single client is created at application startup and shared across all
concurrent requests; connection pooling is handled by redis-py itself.

The in-memory store is process-local. With several workers an
invalidation would only clear the worker that handled the write, so it is
used only in testing mode or when `redis_memory_fallback` is switched on
for a single-worker deployment.
"""

from __future__ import annotations

import logging
from typing import Optional

from redis.asyncio import Redis as AsyncRedis

from .config import Settings, settings as default_settings
from .key_store import InMemoryKeyStore, KeyStore, RedisKeyStore

logger = logging.getLogger(__name__)

DEFAULT_REDIS_URL = "redis://localhost:6379"


async def create_cache_key_store(app_settings: Optional[Settings] = None) -> KeyStore:
    """
    Build the KeyStore used for response caching.

    Returns:
        An InMemoryKeyStore in testing mode when REDIS_URL is not set.
        Otherwise a RedisKeyStore, even when Redis does not answer the
        startup ping: redis-py reconnects on the next command, reads degrade
        to uncached responses meanwhile and invalidations fail loudly. Only
        with `redis_memory_fallback` enabled does a failed ping switch the
        process to an InMemoryKeyStore.
    """
    cfg = app_settings or default_settings

    if cfg.is_testing and not cfg.redis_url:
        logger.info("[REDIS-CACHE] Testing mode without REDIS_URL, using in-memory key store")
        return InMemoryKeyStore()

    password = cfg.redis_password.get_secret_value() if cfg.redis_password else None
    client = AsyncRedis.from_url(
        cfg.redis_url or DEFAULT_REDIS_URL,
        password=password,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        health_check_interval=30,
    )
    try:
        await client.ping()
    except Exception as exc:
        logger.error("[REDIS-CACHE] Async Redis client FAILED to connect: %s", exc)
        if cfg.redis_memory_fallback:
            await client.aclose()
            logger.warning("[REDIS-CACHE] Falling back to process-local in-memory key store")
            return InMemoryKeyStore()
        logger.warning("[REDIS-CACHE] Serving uncached until Redis is reachable")
        return RedisKeyStore(client)

    logger.info("[REDIS-CACHE] Async Redis client initialized and connected")
    return RedisKeyStore(client)


async def close_cache_key_store(key_store: Optional[KeyStore]) -> None:
    """Close the caching key store."""
    if key_store is None:
        return
    try:
        await key_store.close()
    finally:
        logger.info("[REDIS-CACHE] Key store closed")
