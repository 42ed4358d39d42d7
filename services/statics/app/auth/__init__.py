"""Authentication module."""

from services.statics.app.auth.jwt import (
    JwtPayload,
    TokenVerifier,
    extract_bearer_token,
    load_public_key,
    verify_token,
)

__all__ = [
    "JwtPayload",
    "TokenVerifier",
    "extract_bearer_token",
    "load_public_key",
    "verify_token",
]
