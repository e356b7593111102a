"""Password hashing, one-time tokens, and signed session tokens."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import bcrypt
import jwt

from app.core.authorization import parse_role
from app.schemas.auth import SessionPayload

if TYPE_CHECKING:
    from app.core.config import Settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for input validation.
EMAIL_MAX_LEN = 255
NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

SESSION_COOKIE_NAME = "session"

REGISTRATION_TOKEN_LENGTH = 10
REGISTRATION_TOKEN_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
PASSWORD_RESET_TOKEN_BYTES = 32


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def generate_registration_token() -> str:
    """Return a 10-character [A-Z0-9] registration code from the OS CSPRNG."""
    raw = secrets.token_bytes(REGISTRATION_TOKEN_LENGTH)
    return "".join(
        REGISTRATION_TOKEN_ALPHABET[b % len(REGISTRATION_TOKEN_ALPHABET)] for b in raw
    )


def generate_password_reset_token() -> str:
    """Return a 64-hex-character password reset token (32 random bytes)."""
    return secrets.token_hex(PASSWORD_RESET_TOKEN_BYTES)


def create_session_token(payload: SessionPayload, settings: "Settings") -> str:
    """Create a signed session JWT carrying user id, email, role, iat and exp."""
    now = datetime.now(UTC)
    expire = now + timedelta(days=settings.SESSION_EXPIRE_DAYS)
    claims: dict[str, Any] = {
        "sub": str(payload.user_id),
        "email": payload.email,
        "role": int(payload.role),
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(
        claims,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_session_token(token: str, settings: "Settings") -> SessionPayload | None:
    """
    Verify signature and expiry and return the session payload.

    Every failure (bad signature, expired, malformed claims, unknown role)
    yields None; callers never learn why a token was rejected.
    """
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp", "iat", "sub"]},
        )
    except jwt.PyJWTError:
        return None
    role = parse_role(claims.get("role"))
    email = claims.get("email")
    if role is None or not isinstance(email, str):
        return None
    try:
        user_id = int(claims["sub"])
    except (TypeError, ValueError):
        return None
    return SessionPayload(user_id=user_id, email=email, role=role)
