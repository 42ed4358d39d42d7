"""JWT bearer token verification."""

from pathlib import Path

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError
from starlette.datastructures import Headers

from services.statics.app.errors import UnauthorizedError
from shared.utils.logging import get_logger

logger = get_logger(__name__)

ALGORITHM = "RS256"
BEARER_PREFIX = "Bearer "


class JwtPayload(BaseModel):
    """Claims carried by an upload token."""

    user_id: int  # Not enforced; available for quotas and audit logging
    exp: int  # Unix seconds


def load_public_key(path: str | Path) -> str:
    """Read the PEM-encoded RSA public key used to verify tokens.

    Raises:
        OSError: If the file cannot be read
    """
    logger.debug("reading_public_key", path=str(path))
    return Path(path).read_text()


def extract_bearer_token(headers: Headers) -> str:
    """Get the token from the single ``Authorization: Bearer`` header.

    Raises:
        UnauthorizedError: If the header is missing, repeated or not a Bearer token
    """
    values = headers.getlist("authorization")
    if len(values) != 1 or not values[0].startswith(BEARER_PREFIX):
        raise UnauthorizedError("Missing token")

    token = values[0][len(BEARER_PREFIX):].strip()
    if not token:
        raise UnauthorizedError("Missing token")
    return token


def verify_token(token: str, public_key: str, leeway: int = 0) -> JwtPayload:
    """Verify and decode an RS256 token.

    Args:
        token: Encoded JWT
        public_key: PEM-encoded RSA public key
        leeway: Seconds of clock skew tolerated when checking ``exp``

    Returns:
        Decoded payload

    Raises:
        UnauthorizedError: On bad signature, expiry, malformed token, missing
            claims, or any algorithm other than RS256
    """
    try:
        claims = jwt.decode(
            token,
            public_key,
            algorithms=[ALGORITHM],
            options={"leeway": leeway, "require_exp": True},
        )
    except JWTError as e:
        raise UnauthorizedError(f"Failed to parse JWT token: {e}") from e

    try:
        return JwtPayload.model_validate(claims)
    except ValidationError as e:
        raise UnauthorizedError("Failed to parse JWT token: invalid claims") from e


class TokenVerifier:
    """Stateless verifier bound to one public key and leeway."""

    def __init__(self, public_key: str, leeway: int = 0):
        self.public_key = public_key
        self.leeway = leeway

    def verify(self, headers: Headers) -> JwtPayload:
        try:
            return verify_token(extract_bearer_token(headers), self.public_key, self.leeway)
        except UnauthorizedError as e:
            logger.warning("token_rejected", reason=e.description)
            raise
