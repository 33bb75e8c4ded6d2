"""Authentication service — signup, signin and identity resolution.

Raw passwords only ever reach bcrypt; they are never stored and never
logged. Signin answers unknown emails and wrong passwords with the
exact same outcome so it cannot be used to probe which accounts exist.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.auth.password import burn_verification, hash_password, verify_password
from notekeep.auth.tokens import TokenService
from notekeep.db.models import Role, User
from notekeep.db.stores import UserStore
from notekeep.services.outcome import ErrorKind, Outcome

logger = structlog.get_logger()

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class SignIn:
    token: str
    user: User


class AuthService:
    """Business logic for account creation and sign-in."""

    def __init__(self, db: AsyncSession, tokens: TokenService):
        self.db = db
        self.users = UserStore(db)
        self.tokens = tokens

    async def signup(
        self, email: str, raw_password: str, name: Optional[str] = None
    ) -> Outcome[User]:
        email = normalize_email(email)
        if await self.users.find_by_email(email):
            return Outcome.failure(
                ErrorKind.DUPLICATE_EMAIL, "Email already registered"
            )

        user = User(
            email=email,
            name=name,
            password_hash=hash_password(raw_password),
            role=Role.USER,
        )
        outcome = await self.users.save(user)
        if not outcome.ok:
            return outcome

        await self.db.commit()
        logger.info("auth.signup", user_id=str(user.id))
        return outcome

    async def signin(
        self, email: str, raw_password: str, ttl: Optional[timedelta] = None
    ) -> Outcome[SignIn]:
        user = await self.users.find_by_email(normalize_email(email))

        if user is None:
            burn_verification(raw_password)
            logger.info("auth.signin_failed")
            return Outcome.failure(
                ErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE
            )

        if not verify_password(raw_password, user.password_hash):
            logger.info("auth.signin_failed")
            return Outcome.failure(
                ErrorKind.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE
            )

        token = self.tokens.issue(user.email, ttl=ttl)
        logger.info("auth.signin", user_id=str(user.id))
        return Outcome.success(SignIn(token=token, user=user))

    async def resolve(self, identity: str) -> Outcome[User]:
        return await self.users.resolve(identity)
