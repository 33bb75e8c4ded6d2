"""Note service — CRUD with owner-or-admin authorization.

Every method takes the caller's identity (the verified email) as an
argument. Single-note operations check existence first and permission
second, so a missing id is NOT_FOUND for everyone and an existing note
owned by someone else is FORBIDDEN for non-admins.
A title that is empty after stripping whitespace is rejected with
VALIDATION before anything is looked up.
"""

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.db.models import Note
from notekeep.db.stores import NoteStore, UserStore
from notekeep.services.outcome import ErrorKind, Outcome
from notekeep.services.policy import can_access

logger = structlog.get_logger()


BLANK_TITLE_MESSAGE = "Title must not be blank"


class NoteService:
    """Business logic for notes."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = UserStore(db)
        self.notes = NoteStore(db)

    async def _authorized_note(
        self, note_id: uuid.UUID, identity: str, action: str
    ) -> Outcome[Note]:
        resolved = await self.users.resolve(identity)
        if not resolved.ok:
            return Outcome.failure(resolved.error, resolved.message)
        user = resolved.value

        note = await self.notes.find_by_id(note_id)
        if note is None:
            return Outcome.failure(ErrorKind.NOT_FOUND, "Note not found")

        if not can_access(user, note):
            logger.warning(
                "notes.forbidden",
                note_id=str(note_id),
                user_id=str(user.id),
                action=action,
            )
            return Outcome.failure(
                ErrorKind.FORBIDDEN,
                f"You don't have permission to {action} this note",
            )
        return Outcome.success(note)

    # ─── Queries ────────────────────────────────────────

    async def list_notes(self, identity: str) -> Outcome[list[Note]]:
        resolved = await self.users.resolve(identity)
        if not resolved.ok:
            return Outcome.failure(resolved.error, resolved.message)
        user = resolved.value

        if user.is_admin:
            return Outcome.success(await self.notes.find_all())
        return Outcome.success(await self.notes.find_by_owner(user.id))

    async def get_note(self, note_id: uuid.UUID, identity: str) -> Outcome[Note]:
        return await self._authorized_note(note_id, identity, "view")

    # ─── Mutations ──────────────────────────────────────

    async def create_note(
        self, title: str, description: str, identity: str
    ) -> Outcome[Note]:
        if not title.strip():
            return Outcome.failure(ErrorKind.VALIDATION, BLANK_TITLE_MESSAGE)

        resolved = await self.users.resolve(identity)
        if not resolved.ok:
            return Outcome.failure(resolved.error, resolved.message)
        user = resolved.value

        note = Note(title=title, description=description, owner=user)
        await self.notes.save(note)
        await self.db.commit()

        logger.info("notes.created", note_id=str(note.id), owner_id=str(user.id))
        return Outcome.success(note)

    async def update_note(
        self, note_id: uuid.UUID, title: str, description: str, identity: str
    ) -> Outcome[Note]:
        if not title.strip():
            return Outcome.failure(ErrorKind.VALIDATION, BLANK_TITLE_MESSAGE)

        outcome = await self._authorized_note(note_id, identity, "update")
        if not outcome.ok:
            return outcome
        note = outcome.value

        note.title = title
        note.description = description
        await self.notes.save(note)
        await self.db.commit()

        logger.info("notes.updated", note_id=str(note.id))
        return Outcome.success(note)

    async def delete_note(self, note_id: uuid.UUID, identity: str) -> Outcome[None]:
        outcome = await self._authorized_note(note_id, identity, "delete")
        if not outcome.ok:
            return Outcome.failure(outcome.error, outcome.message)

        await self.notes.delete(outcome.value)
        await self.db.commit()

        logger.info("notes.deleted", note_id=str(note_id))
        return Outcome.success(None)
