"""Password hashing, bearer token minting, and session cookie helpers.

Pipeline:
- hash_password / verify_password: bcrypt with a per-hash salt
- verify_password_or_dummy: timing-safe check for unknown users
- generate_token / hash_token: opaque bearer tokens, stored only as SHA-256
- token_expiry: expiry timestamp from AUTH_TOKEN_TTL_MINUTES
- set_auth_cookie / clear_auth_cookie: httpOnly session cookie
"""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta
from functools import lru_cache

import bcrypt
from fastapi import Response

from tasktrack.core.config import settings

# 32 random bytes, URL-safe base64 encoded (43 chars)
_TOKEN_BYTES = 32

# bcrypt only looks at the first 72 bytes of input
_BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a plain-text password with bcrypt.

    Args:
        password: Plain-text password.

    Returns:
        bcrypt hash as a str (salt and cost factor embedded).
    """
    return bcrypt.hashpw(
        password.encode()[:_BCRYPT_MAX_BYTES],
        bcrypt.gensalt(rounds=settings.bcrypt_rounds),
    ).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    return bcrypt.checkpw(
        password.encode()[:_BCRYPT_MAX_BYTES], password_hash.encode()
    )


@lru_cache(maxsize=1)
def _dummy_hash() -> bytes:
    # Generated once per process at the configured cost factor so that the
    # unknown-user path costs the same as a real comparison.
    return bcrypt.hashpw(
        secrets.token_bytes(16), bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    )


def verify_password_or_dummy(password: str, password_hash: str | None) -> bool:
    """Verify a password, spending bcrypt time even when there is no user.

    Security: prevents user enumeration via response time differences.

    Args:
        password: Plain-text password from the login request.
        password_hash: Stored hash, or None when the email is unknown.

    Returns:
        True only if a hash was given and the password matches it.
    """
    if password_hash is None:
        bcrypt.checkpw(password.encode()[:_BCRYPT_MAX_BYTES], _dummy_hash())
        return False
    return verify_password(password, password_hash)


def generate_token() -> str:
    """Mint a new unguessable bearer token from the OS CSPRNG."""
    return secrets.token_urlsafe(_TOKEN_BYTES)


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a bearer token, used as its lookup key."""
    return hashlib.sha256(token.encode()).hexdigest()


def token_expiry(now: datetime | None = None) -> datetime | None:
    """Expiry for a token issued at ``now``.

    Returns:
        Expiry timestamp, or None when AUTH_TOKEN_TTL_MINUTES is 0.
    """
    if settings.auth_token_ttl_minutes == 0:
        return None
    issued_at = now or datetime.now(UTC)
    return issued_at + timedelta(minutes=settings.auth_token_ttl_minutes)


def set_auth_cookie(response: Response, token: str) -> None:
    """Set httpOnly session cookie carrying the bearer token.

    Security: httpOnly prevents XSS cookie theft. Secure flag and SameSite
    are configured via settings for environment-appropriate security.

    Args:
        response: FastAPI response object.
        token: Plain bearer token.
    """
    max_age = settings.auth_token_ttl_minutes * 60 or None
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite=settings.auth_cookie_samesite,
        path="/",
        max_age=max_age,
        domain=settings.auth_cookie_domain or None,
    )


def clear_auth_cookie(response: Response) -> None:
    """Expire the session cookie on the client."""
    response.delete_cookie(
        key=settings.auth_cookie_name,
        path="/",
        domain=settings.auth_cookie_domain or None,
        secure=settings.auth_cookie_secure,
        httponly=True,
        samesite=settings.auth_cookie_samesite,
    )
