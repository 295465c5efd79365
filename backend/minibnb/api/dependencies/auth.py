# backend/minibnb/api/dependencies/auth.py
"""
Authentication dependencies.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWTError

from ...auth import AuthenticatedUser, decode_access_token, user_from_claims
from ...core.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthenticatedUser:
    """
    Resolve the caller from the Authorization: Bearer header.

    Raises:
        UnauthorizedException: If the header is missing or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException("Missing bearer token")

    try:
        claims = decode_access_token(credentials.credentials)
        return user_from_claims(claims)
    except PyJWTError as exc:
        logger.info(f"Rejected bearer token: {exc}")
        raise UnauthorizedException("Invalid or expired token")
