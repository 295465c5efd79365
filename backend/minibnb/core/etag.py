# backend/minibnb/core/etag.py
"""Content digests and weak validation tokens for conditional GET."""

import hashlib
from typing import Optional


def content_digest(payload: bytes) -> str:
    """Stable hex fingerprint of a byte sequence."""
    return hashlib.md5(payload).hexdigest()


def weak_etag(payload: bytes) -> str:
    """Weak ETag for a response body, e.g. W/"5d41402abc4b2a76b9719d911017c592"."""
    return f'W/"{content_digest(payload)}"'


def etag_matches(if_none_match: Optional[str], etag: str) -> bool:
    """
    Check an If-None-Match header value against a token.

    The header may carry a comma-separated list of tags or the wildcard `*`.
    """
    if not if_none_match:
        return False
    candidates = [tag.strip() for tag in if_none_match.split(",")]
    return "*" in candidates or etag in candidates
