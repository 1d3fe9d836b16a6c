"""Password hashing and JWT creation/verification for authentication.

Nothing here reads settings: the signing secret and hashing cost are passed in
by the caller so services can be built with explicit configuration.
"""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

# bcrypt cost used when the caller does not pass one.
DEFAULT_BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72


def hash_password(plain_password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (constant-time compare in bcrypt)."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def dummy_password_hash(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    Hash compared against when the login email is unknown.

    Built at the same cost as real hashes so both failure paths pay for the
    same bcrypt check. One hash per cost, computed on first use.
    """
    return hash_password("bookshelf-dummy-password", rounds=rounds)


def create_access_token(
    claims: dict[str, Any],
    secret: str,
    algorithm: str,
    expire_minutes: int,
    now: datetime | None = None,
) -> str:
    """Create a signed JWT carrying claims plus iat and exp."""
    issued_at = now or datetime.now(UTC)
    payload: dict[str, Any] = {
        **claims,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (id, role, iat, exp).
    Raises jwt.PyJWTError on invalid or expired token, or when exp is missing.
    """
    return jwt.decode(
        token,
        secret,
        algorithms=[algorithm],
        options={"require": ["exp"]},
    )
