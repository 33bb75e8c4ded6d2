"""Pydantic schemas for notes."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class NoteWrite(BaseModel):
    """Body for both create and update — title and description only."""
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=10_000)


class NoteOwner(BaseModel):
    id: uuid.UUID
    email: str
    name: Optional[str] = None

    model_config = {"from_attributes": True}


class NoteRead(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    owner: NoteOwner
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
