"""Password hashing and signed session tokens for the guard sessions."""

import re
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

EMAIL_MAX_LEN = 255
PASSWORD_MAX_LEN = 128
# Write-time strength rule for new passwords.
PASSWORD_MIN_LEN = 8


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


@lru_cache
def _dummy_hash() -> str:
    return hash_password("unified-login-timing-equalizer")


def burn_password_check(plain_password: str) -> None:
    """
    Spend one bcrypt comparison on a throwaway hash.

    Called on the unknown-email and inactive-account paths so their response time
    matches a real password check.
    """
    verify_password(plain_password, _dummy_hash())


def password_strength_errors(
    password: str,
    min_length: int = PASSWORD_MIN_LEN,
    require_special: bool = False,
) -> list[str]:
    """Return human-readable reasons the password is too weak (empty list when acceptable)."""
    if len(password) < min_length:
        return [f"Password must be at least {min_length} characters."]
    errors: list[str] = []
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter.")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter.")
    if not re.search(r"[0-9]", password):
        errors.append("Password must contain at least one digit.")
    if require_special and not re.search(r"[^A-Za-z0-9]", password):
        errors.append("Password must contain at least one special character.")
    return errors


def session_lifetime(remember: bool) -> timedelta:
    """Token lifetime: REMEMBER_EXPIRE_DAYS when remembered, else SESSION_EXPIRE_MINUTES."""
    if remember:
        return timedelta(days=settings.REMEMBER_EXPIRE_DAYS)
    return timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)


def create_session_token(session_id: str, remember: bool) -> str:
    """Create a signed token naming a server-side guard session, with iat and exp."""
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sid": session_id,
        "exp": now + session_lifetime(remember),
        "iat": now,
    }
    secret = settings.SESSION_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.SESSION_ALGORITHM,
    )


def decode_session_token(token: str) -> dict[str, Any]:
    """
    Decode and validate a session token; return payload (sid, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.SESSION_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.SESSION_ALGORITHM],
    )
