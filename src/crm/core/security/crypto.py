"""Token utilities - provider JWT verification and one-time token hashing."""

import secrets
from hashlib import sha256
from typing import Any

from jose import JWTError, jwt

from src.crm.core.config import get_settings


def generate_token() -> str:
    """Generate a URL-safe one-time token (invitations, email verification)."""
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    """Hash a token using SHA256 for secure storage."""
    return sha256(token.encode()).hexdigest()


def decode_token(token: str) -> dict[str, Any] | None:
    """Verify a JWT issued by the hosted auth provider. Returns None on any error."""
    settings = get_settings()
    audience = settings.jwt_audience or None
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=audience,
            options={"verify_aud": audience is not None},
        )
    except JWTError:
        return None
