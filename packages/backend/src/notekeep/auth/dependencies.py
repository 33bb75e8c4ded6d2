"""FastAPI auth dependencies.

Used as Depends() in route handlers to extract and verify the bearer
token. The result is the identity (the user's email) which handlers
pass explicitly into the services.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException

from notekeep.auth.tokens import TokenService, get_token_service


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=401,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_identity(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """Resolve the bearer token to an identity email (401 if absent or invalid)."""
    if not authorization:
        raise _unauthorized("Authentication required")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized("Authentication required")

    outcome = tokens.verify(token.strip())
    if not outcome.ok:
        raise _unauthorized(outcome.message)
    return outcome.value
