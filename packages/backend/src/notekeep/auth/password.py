"""Password hashing utilities.

Uses bcrypt for password hashing. bcrypt automatically handles salting
and is resistant to rainbow table attacks. The work factor comes from
settings (12 by default, ~100ms per hash on modern hardware); tests
turn it down to keep the suite fast.
"""

from functools import lru_cache
from typing import Optional

import bcrypt

from notekeep.config import settings


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt.

    bcrypt includes a random salt automatically and produces hashes
    starting with "$2b$". Passwords are truncated to 72 bytes
    (bcrypt's limit).
    """
    pw_bytes = password.encode("utf-8")[:72]
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash."""
    try:
        pw_bytes = password.encode("utf-8")[:72]
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("notekeep-dummy-password")


def burn_verification(password: str) -> None:
    """Spend the same time as a real check against an unknown account.

    Called on signin when the email does not exist, so response time
    does not reveal whether an account is registered.
    """
    verify_password(password, _dummy_hash())
