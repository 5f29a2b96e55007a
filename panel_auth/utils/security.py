"""Security utilities for password hashing and random secrets.

This module provides password hashing using bcrypt, keyed digests for
password reset tokens, and random string generation for remember tokens.
"""

import hashlib
import hmac
import secrets
import string

from passlib.context import CryptContext

from panel_auth.core.config.settings import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_WORK_FACTOR,
)

RANDOM_ALPHABET = string.ascii_letters + string.digits


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        str: Bcrypt-hashed password
    """
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        password: Plain text password to verify
        hashed_password: Bcrypt hash to verify against

    Returns:
        bool: True if password matches hash

    Security:
        - Uses constant-time comparison via bcrypt
    """
    return pwd_context.verify(password, hashed_password)


def random_string(length: int) -> str:
    """Return a cryptographically random alphanumeric string."""
    return "".join(secrets.choice(RANDOM_ALPHABET) for _ in range(length))


def digest_token(token: str) -> str:
    """Keyed SHA-256 digest of a reset token, used as its stored form."""
    return hmac.new(
        settings.SECRET_KEY.encode(), token.encode(), hashlib.sha256
    ).hexdigest()


def token_matches(token: str, stored_digest: str) -> bool:
    """Constant-time check of a raw token against its stored digest."""
    return hmac.compare_digest(digest_token(token), stored_digest)
