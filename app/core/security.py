"""Password hashing and session token (JWT) creation/verification."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

DEFAULT_JWT_ALGORITHM = "HS256"
# Claims every session token must carry; the password hash is never one of them.
SESSION_CLAIM_KEYS = ("id", "name", "role")


class InvalidSessionTokenError(Exception):
    """Raised when a session token is malformed, badly signed, or expired."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Each call uses a fresh salt."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes never verify."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


def create_session_token(
    claims: dict[str, Any],
    secret: str,
    ttl: timedelta,
    algorithm: str = DEFAULT_JWT_ALGORITHM,
    now: datetime | None = None,
) -> str:
    """Create a signed JWT carrying `claims` under "user", valid until now + ttl."""
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        "user": dict(claims),
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_session_token(
    token: str,
    secret: str,
    algorithm: str = DEFAULT_JWT_ALGORITHM,
) -> dict[str, Any]:
    """
    Verify signature and expiry; return the embedded claims (id, name, role).
    Raises InvalidSessionTokenError on any failure.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise InvalidSessionTokenError("Session token has expired") from e
    except jwt.PyJWTError as e:
        raise InvalidSessionTokenError(f"Invalid session token: {e!s}") from e

    claims = payload.get("user")
    if not isinstance(claims, dict) or any(k not in claims for k in SESSION_CLAIM_KEYS):
        raise InvalidSessionTokenError("Invalid session token payload")
    return {k: claims[k] for k in SESSION_CLAIM_KEYS}
