# backend/minibnb/core/config.py
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


class Settings(BaseSettings):
    """Runtime configuration, read from the environment (case-insensitive)."""

    environment: str = Field(default="development", description="development|production|test")
    is_testing: bool = False  # Set to True when running tests
    log_level: str = "INFO"

    # Persistence
    database_url: str = Field(
        default="sqlite:///./minibnb.db",
        description="SQLAlchemy URL for the relational store",
    )

    # Cache settings
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis URL for the response cache; unset means redis://localhost:6379",
    )
    redis_memory_fallback: bool = Field(
        default=False,
        description="Cache in process memory when Redis is down at startup (single worker only)",
    )
    redis_password: Optional[SecretStr] = None

    # Auth provider (bearer JWTs)
    jwt_secret: SecretStr = Field(
        default=SecretStr("change-me-in-production"),
        description="Shared secret used to verify bearer tokens",
    )
    jwt_algorithm: str = "HS256"
    jwt_audience: Optional[str] = Field(
        default="authenticated",
        description="Expected 'aud' claim; empty disables audience verification",
    )

    # HTTP surface
    api_v1_prefix: str = "/api/v1"
    frontend_url: str = "http://localhost:3000"
    cors_origins: str = Field(default="", description="Comma-separated extra CORS origins")

    # Response cache TTLs (seconds)
    listings_cache_ttl: int = 300  # 5 minutes
    listing_detail_cache_ttl: int = 3600  # 1 hour
    availability_cache_ttl: int = 300  # 5 minutes
    amenities_max_age: int = 86400  # 1 day, header-only

    model_config = SettingsConfigDict(
        env_file=".env" if not os.getenv("CI") else None,
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("api_v1_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = (value or "").strip()
        if not value:
            return ""
        if not value.startswith("/"):
            value = "/" + value
        return value.rstrip("/")

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @property
    def allowed_origins(self) -> List[str]:
        extra = [token.strip() for token in self.cors_origins.split(",") if token.strip()]
        origins = [self.frontend_url, *extra]
        if not self.is_production:
            origins.append("http://localhost:3000")
        return list(dict.fromkeys(origin for origin in origins if origin))


settings = Settings()
