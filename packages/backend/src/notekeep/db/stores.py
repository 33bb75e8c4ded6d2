"""Credential and note stores — the only code that queries the tables.

Services go through these instead of building queries themselves.
Stores flush but never commit; the calling service
owns the transaction.
"""

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from notekeep.auth.tokens import INVALID_TOKEN_MESSAGE
from notekeep.db.models import Note, User
from notekeep.services.outcome import ErrorKind, Outcome


class UserStore:
    """Persisted user records, unique by email."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def resolve(self, identity: str) -> Outcome[User]:
        """Map a verified identity (email) to its user.

        A well-signed token for an email that no longer resolves is
        treated like any other bad token.
        """
        user = await self.find_by_email(identity)
        if user is None:
            return Outcome.failure(ErrorKind.INVALID_TOKEN, INVALID_TOKEN_MESSAGE)
        return Outcome.success(user)

    async def save(self, user: User) -> Outcome[User]:
        """Insert or update a user.

        The unique index on email is the final word: a concurrent signup
        that slipped past the service's pre-check lands here as an
        IntegrityError and comes back as DUPLICATE_EMAIL.
        """
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            return Outcome.failure(
                ErrorKind.DUPLICATE_EMAIL, "Email already registered"
            )
        return Outcome.success(user)


class NoteStore:
    """Persisted notes. Owners are always eager-loaded."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _query(self):
        return (
            select(Note)
            .options(selectinload(Note.owner))
            .order_by(Note.created_at, Note.id)
        )

    async def find_all(self) -> list[Note]:
        result = await self.db.execute(self._query())
        return list(result.scalars().all())

    async def find_by_owner(self, owner_id: uuid.UUID) -> list[Note]:
        result = await self.db.execute(
            self._query().where(Note.owner_id == owner_id)
        )
        return list(result.scalars().all())

    async def find_by_id(self, note_id: uuid.UUID) -> Optional[Note]:
        result = await self.db.execute(self._query().where(Note.id == note_id))
        return result.scalars().first()

    async def save(self, note: Note) -> Note:
        self.db.add(note)
        await self.db.flush()
        return note

    async def delete(self, note: Note) -> None:
        await self.db.delete(note)
        await self.db.flush()
