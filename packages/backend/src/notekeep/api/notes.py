"""Note API routes.

Every route receives the caller's identity from the bearer token and
hands it to NoteService explicitly. Routes handle HTTP concerns
(status codes, bodies); the service decides who may do what.
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notekeep.api.errors import unwrap
from notekeep.auth.dependencies import get_current_identity
from notekeep.db.engine import get_db
from notekeep.schemas.note import NoteRead, NoteWrite
from notekeep.services.note_service import NoteService

router = APIRouter(prefix="/notes")


def _svc(db: AsyncSession = Depends(get_db)) -> NoteService:
    return NoteService(db)


@router.get("", response_model=list[NoteRead])
async def list_notes(
    identity: str = Depends(get_current_identity),
    svc: NoteService = Depends(_svc),
):
    """Own notes for users; every note for admins."""
    return unwrap(await svc.list_notes(identity))


@router.get("/{note_id}", response_model=NoteRead)
async def get_note(
    note_id: uuid.UUID,
    identity: str = Depends(get_current_identity),
    svc: NoteService = Depends(_svc),
):
    return unwrap(await svc.get_note(note_id, identity))


@router.post("", response_model=NoteRead, status_code=201)
async def create_note(
    body: NoteWrite,
    identity: str = Depends(get_current_identity),
    svc: NoteService = Depends(_svc),
):
    return unwrap(await svc.create_note(body.title, body.description, identity))


@router.put("/{note_id}", response_model=NoteRead)
async def update_note(
    note_id: uuid.UUID,
    body: NoteWrite,
    identity: str = Depends(get_current_identity),
    svc: NoteService = Depends(_svc),
):
    return unwrap(
        await svc.update_note(note_id, body.title, body.description, identity)
    )


@router.delete("/{note_id}")
async def delete_note(
    note_id: uuid.UUID,
    identity: str = Depends(get_current_identity),
    svc: NoteService = Depends(_svc),
):
    unwrap(await svc.delete_note(note_id, identity))
    return {"message": "Note deleted successfully"}
