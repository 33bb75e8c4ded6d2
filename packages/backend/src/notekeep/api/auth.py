"""Auth API — signup, signin, current user.

- POST /auth/signup → create a USER account
- POST /auth/signin → email/password → access token
- GET /auth/me → the authenticated user's profile
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.api.errors import unwrap
from notekeep.auth.dependencies import get_current_identity
from notekeep.auth.tokens import TokenService, get_token_service
from notekeep.db.engine import get_db
from notekeep.schemas.auth import (
    SigninRequest,
    SigninResponse,
    SignupRequest,
    SignupResponse,
    UserRead,
)
from notekeep.services.auth_service import AuthService

router = APIRouter(prefix="/auth")


def _svc(
    db: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(db, tokens)


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(body: SignupRequest, svc: AuthService = Depends(_svc)):
    """Create a new user account. New accounts always get the USER role."""
    user = unwrap(await svc.signup(body.email, body.password, name=body.name))
    return SignupResponse(user=UserRead.model_validate(user))


@router.post("/signin", response_model=SigninResponse)
async def signin(body: SigninRequest, svc: AuthService = Depends(_svc)):
    """Exchange email and password for an access token."""
    result = unwrap(await svc.signin(body.email, body.password))
    return SigninResponse(
        token=result.token,
        email=result.user.email,
        name=result.user.name,
        role=result.user.role,
    )


@router.get("/me", response_model=UserRead)
async def get_me(
    identity: str = Depends(get_current_identity),
    svc: AuthService = Depends(_svc),
):
    return unwrap(await svc.resolve(identity))
