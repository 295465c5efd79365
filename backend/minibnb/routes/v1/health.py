# backend/minibnb/routes/v1/health.py
"""
Health check endpoints for monitoring and load balancer health checks.
"""

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from ...core.constants import API_VERSION, BRAND_NAME

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class RootResponse(BaseModel):
    message: str
    version: str
    docs: str
    health: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )


@router.get("/", response_model=RootResponse)
async def root() -> RootResponse:
    return RootResponse(
        message=f"Welcome to {BRAND_NAME} API",
        version=API_VERSION,
        docs="/docs",
        health="/health",
    )
