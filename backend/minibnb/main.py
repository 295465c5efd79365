# backend/minibnb/main.py
"""
MiniBnB API application.

`create_app()` builds the FastAPI application; the module-level `app` is
the uvicorn entrypoint:

    uvicorn minibnb.main:app --reload
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator, Optional

from fastapi import APIRouter, FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .core.cache_redis import close_cache_key_store, create_cache_key_store
from .core.config import is_running_tests, settings
from .core.constants import API_DESCRIPTION, API_TITLE, API_VERSION, BRAND_NAME
from .core.key_store import KeyStore
from .core.metrics import REGISTRY
from .errors import register_error_handlers
from .routes.v1 import (
    amenities,
    availability,
    bookings,
    cohosts,
    health,
    listings,
    messages,
    profiles,
    users,
)
from .services.cache_service import CacheKeyBuilder, CacheService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)

metrics_router = APIRouter()


@metrics_router.get("/metrics", include_in_schema=False)
async def metrics_endpoint() -> Response:
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


def _attach_key_store(app: FastAPI, key_store: KeyStore) -> None:
    app.state.key_store = key_store
    app.state.cache_service = CacheService(
        key_store, CacheKeyBuilder(api_prefix=settings.api_v1_prefix)
    )


def create_app(key_store: Optional[KeyStore] = None) -> FastAPI:
    """
    Build the application.

    Args:
        key_store: KeyStore backing the response cache. When omitted the
            lifespan handler connects to Redis (in-memory in testing mode)
            and closes the store on shutdown.
    """

    @asynccontextmanager
    async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(f"{BRAND_NAME} API starting up...")
        logger.info(f"Environment: {settings.environment}")
        if is_running_tests():
            logger.info("Running under pytest (test mode active)")

        owned_store: Optional[KeyStore] = None
        if key_store is None:
            owned_store = await create_cache_key_store(settings)
            _attach_key_store(app, owned_store)

        try:
            yield
        finally:
            logger.info(f"{BRAND_NAME} API shutting down...")
            await close_cache_key_store(owned_store)

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=app_lifespan,
    )

    if key_store is not None:
        _attach_key_store(app, key_store)

    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["*"],
        expose_headers=["ETag"],
    )

    api_v1 = APIRouter(prefix=settings.api_v1_prefix)
    api_v1.include_router(listings.router, prefix="/listings")
    api_v1.include_router(availability.router, prefix="/listings")
    api_v1.include_router(bookings.router, prefix="/bookings")
    api_v1.include_router(cohosts.router, prefix="/cohosts")
    api_v1.include_router(profiles.router, prefix="/profiles")
    api_v1.include_router(users.router, prefix="/users")
    api_v1.include_router(messages.router, prefix="/messages")
    api_v1.include_router(amenities.router, prefix="/amenities")

    app.include_router(health.router)
    app.include_router(api_v1)
    app.include_router(metrics_router)

    return app


app = create_app()
