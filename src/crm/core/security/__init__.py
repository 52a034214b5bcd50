"""Security utilities - tokens and response headers."""

from src.crm.core.security.crypto import decode_token, generate_token, hash_token
from src.crm.core.security.headers import DOCS_CSP, SecurityHeadersMiddleware

__all__ = [
    "DOCS_CSP",
    "SecurityHeadersMiddleware",
    "decode_token",
    "generate_token",
    "hash_token",
]
