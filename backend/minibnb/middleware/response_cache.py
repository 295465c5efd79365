# backend/minibnb/middleware/response_cache.py
"""
Read-through response cache for JSON GET endpoints.

Endpoints opt in with a marker decorator placed under the route decorator:

    router = APIRouter(route_class=CachedRoute)

    @router.get("/listings/{listing_id}")
    @cache_middleware(3600)
    async def get_listing(...): ...

CachedRoute wraps the route's request handler with ReadThroughCache, so the
endpoint body is unaware it is being cached. Keys are "cache:" + path +
query string, taken verbatim from the request URL.

Store failures on this path never reach the client: a failed lookup is a
miss and a failed write-through is logged and skipped.
"""

from collections.abc import Awaitable, Callable
import logging
from typing import Any, Dict, Optional, TypeVar

from fastapi import Request, Response
from fastapi.routing import APIRoute
from starlette.responses import StreamingResponse

from ..core.etag import etag_matches, weak_etag
from ..core.key_store import KeyStore
from ..core.metrics import (
    CACHE_LOOKUPS_TOTAL,
    CACHE_NOT_MODIFIED_TOTAL,
    CACHE_WRITE_FAILURES_TOTAL,
)
from ..services.cache_service import CacheKeyBuilder

logger = logging.getLogger(__name__)

RequestHandler = Callable[[Request], Awaitable[Response]]
F = TypeVar("F", bound=Callable[..., Any])

CACHE_TTL_ATTR = "_cache_ttl"
CACHE_CONTROL_MAX_AGE_ATTR = "_cache_control_max_age"


def request_cache_key(request: Request) -> str:
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"
    return CacheKeyBuilder.for_url(path)


class ReadThroughCache:
    """
    Wraps a request handler with hit/miss handling and conditional GET.

    HIT: the stored body is returned, or 304 when If-None-Match carries its
    ETag. MISS: the handler runs, a 200 body is written through with the
    TTL, and the same 304 rule applies to the fresh body.
    """

    def __init__(self, key_store: KeyStore, ttl: int):
        self.key_store = key_store
        self.ttl = ttl

    def _headers(self, etag: str) -> Dict[str, str]:
        return {"Cache-Control": f"private, max-age={self.ttl}", "ETag": etag}

    async def _lookup(self, key: str) -> Optional[str]:
        try:
            cached = await self.key_store.get(key)
        except Exception as exc:
            logger.warning("[CACHE] Lookup failed for %s, serving uncached: %s", key, exc)
            CACHE_LOOKUPS_TOTAL.labels(outcome="error").inc()
            return None
        CACHE_LOOKUPS_TOTAL.labels(outcome="hit" if cached is not None else "miss").inc()
        return cached

    async def _write_through(self, key: str, body: bytes) -> None:
        try:
            await self.key_store.set_ex(key, self.ttl, body.decode("utf-8"))
        except Exception as exc:
            logger.error("[CACHE] Write-through failed for %s: %s", key, exc)
            CACHE_WRITE_FAILURES_TOTAL.inc()

    def wrap(self, handler: RequestHandler) -> RequestHandler:
        """Return a handler with the same signature that serves through the cache."""

        async def cached_handler(request: Request) -> Response:
            if request.method != "GET":
                return await handler(request)

            key = request_cache_key(request)
            if_none_match = request.headers.get("if-none-match")

            cached = await self._lookup(key)
            if cached is not None:
                payload = cached.encode("utf-8")
                headers = self._headers(weak_etag(payload))
                if etag_matches(if_none_match, headers["ETag"]):
                    CACHE_NOT_MODIFIED_TOTAL.labels(source="cache").inc()
                    return Response(status_code=304, headers=headers)
                logger.debug("[CACHE] Hit %s", key)
                return Response(content=payload, media_type="application/json", headers=headers)

            response = await handler(request)
            if response.status_code != 200 or isinstance(response, StreamingResponse):
                return response

            body = bytes(response.body)
            await self._write_through(key, body)

            headers = self._headers(weak_etag(body))
            if etag_matches(if_none_match, headers["ETag"]):
                CACHE_NOT_MODIFIED_TOTAL.labels(source="fresh").inc()
                return Response(status_code=304, headers=headers)

            response.headers.update(headers)
            return response

        return cached_handler


def with_cache_control(handler: RequestHandler, max_age: int) -> RequestHandler:
    """Header-only variant: sets Cache-Control on successful GETs, no store involved."""

    async def cache_control_handler(request: Request) -> Response:
        response = await handler(request)
        if request.method == "GET" and response.status_code == 200:
            response.headers["Cache-Control"] = f"public, max-age={max_age}"
        return response

    return cache_control_handler


def cache_middleware(ttl: int) -> Callable[[F], F]:
    """Mark an endpoint for read-through caching with the given TTL in seconds."""
    if ttl <= 0:
        raise ValueError("ttl must be a positive number of seconds")

    def decorator(func: F) -> F:
        setattr(func, CACHE_TTL_ATTR, ttl)
        return func

    return decorator


def cache_control_middleware(max_age: int) -> Callable[[F], F]:
    """Mark an endpoint for header-only caching by browsers and intermediaries."""

    def decorator(func: F) -> F:
        setattr(func, CACHE_CONTROL_MAX_AGE_ATTR, max_age)
        return func

    return decorator


class CachedRoute(APIRoute):
    """
    APIRoute that honours cache_middleware / cache_control_middleware markers.

    The KeyStore is resolved per request from app.state so the application
    (or a test) decides which store backs the cache.
    """

    def get_route_handler(self) -> RequestHandler:
        handler = super().get_route_handler()

        max_age = getattr(self.endpoint, CACHE_CONTROL_MAX_AGE_ATTR, None)
        if max_age is not None:
            handler = with_cache_control(handler, max_age)

        ttl = getattr(self.endpoint, CACHE_TTL_ATTR, None)
        if ttl is None:
            return handler

        inner = handler

        async def read_through_handler(request: Request) -> Response:
            key_store: Optional[KeyStore] = getattr(request.app.state, "key_store", None)
            if key_store is None:
                logger.warning(
                    "[CACHE] No key store configured, serving %s uncached", request.url.path
                )
                return await inner(request)
            return await ReadThroughCache(key_store, ttl).wrap(inner)(request)

        return read_through_handler
