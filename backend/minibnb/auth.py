"""
Bearer token verification.

Tokens are issued by the external auth provider and signed with a shared
secret. This module only verifies them (and mints them for tests and local
tooling); sign-up and login are owned by the provider.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import logging
from typing import Any, Dict, Optional, cast

import jwt

from .core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity extracted from a verified bearer token."""

    id: str
    email: Optional[str] = None


def decode_access_token(token: str, app_settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Verify a JWT and return its claims.

    Raises:
        jwt.PyJWTError: If the signature, expiry or audience check fails
    """
    cfg = app_settings or default_settings
    secret = cfg.jwt_secret.get_secret_value()
    if cfg.jwt_audience:
        payload_raw = jwt.decode(
            token,
            secret,
            algorithms=[cfg.jwt_algorithm],
            audience=cfg.jwt_audience,
        )
    else:
        payload_raw = jwt.decode(
            token,
            secret,
            algorithms=[cfg.jwt_algorithm],
            options={"verify_aud": False},
        )
    return cast(Dict[str, Any], payload_raw)


def user_from_claims(claims: Dict[str, Any]) -> AuthenticatedUser:
    subject = claims.get("sub")
    if not subject:
        raise jwt.InvalidTokenError("Token has no subject")
    return AuthenticatedUser(id=str(subject), email=claims.get("email"))


def create_access_token(
    user_id: str,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
    app_settings: Optional[Settings] = None,
) -> str:
    """
    Create a JWT access token shaped like the auth provider's.

    Args:
        user_id: Profile id placed in the `sub` claim
        email: Optional email claim
        expires_delta: Optional expiration time delta (default one hour)

    Returns:
        str: The encoded JWT token
    """
    cfg = app_settings or default_settings
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    to_encode: Dict[str, Any] = {"sub": user_id, "exp": expire}
    if email:
        to_encode["email"] = email
    if cfg.jwt_audience:
        to_encode["aud"] = cfg.jwt_audience
    return jwt.encode(to_encode, cfg.jwt_secret.get_secret_value(), algorithm=cfg.jwt_algorithm)
