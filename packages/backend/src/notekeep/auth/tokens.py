"""JWT access token issuance and verification.

JWT (JSON Web Token) provides stateless authentication: validity is
decided by the signature and the expiry claim alone, with no
server-side session table.

The token carries the user's email as ``sub``. Every verification
failure (bad signature, expired, malformed, wrong type) collapses to
the same INVALID_TOKEN outcome and message, so callers cannot tell
which check failed.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from notekeep.config import settings
from notekeep.services.outcome import ErrorKind, Outcome

INVALID_TOKEN_MESSAGE = "Invalid token"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and verifies signed access tokens.

    The clock is injectable so expiry is a pure function of
    (signing key, clock) and can be tested without sleeping.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        default_ttl: timedelta = timedelta(minutes=60),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.default_ttl = default_ttl
        self.clock = clock

    def issue(self, subject: str, ttl: Optional[timedelta] = None) -> str:
        """Create a signed access token for ``subject``.

        exp is rounded up to the next whole second so a token never
        expires before its full ttl has elapsed.
        """
        now = self.clock()
        expires = now + (ttl if ttl is not None else self.default_ttl)
        payload = {
            "sub": subject,
            "type": "access",
            "iat": int(now.timestamp()),
            "exp": math.ceil(expires.timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> Outcome[str]:
        """Verify a token and return its subject.

        Expiry is checked against the injected clock rather than
        PyJWT's wall clock, so exp/iat verification is switched off in
        the decode call and done here.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={
                    "require": ["sub", "exp", "iat"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.InvalidTokenError:
            return Outcome.failure(ErrorKind.INVALID_TOKEN, INVALID_TOKEN_MESSAGE)

        subject = payload.get("sub")
        exp = payload.get("exp")
        valid = (
            payload.get("type") == "access"
            and isinstance(subject, str)
            and bool(subject)
            and isinstance(exp, (int, float))
            and self.clock().timestamp() < exp
        )
        if not valid:
            return Outcome.failure(ErrorKind.INVALID_TOKEN, INVALID_TOKEN_MESSAGE)
        return Outcome.success(subject)


def get_token_service() -> TokenService:
    """FastAPI dependency — token service configured from settings."""
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        default_ttl=timedelta(minutes=settings.access_token_expire_minutes),
    )
