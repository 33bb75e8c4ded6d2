"""Pydantic schemas for signup, signin and the current user.

Separate request schemas (input) from read schemas (output).
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from notekeep.db.models import Role

class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    name: Optional[str] = Field(None, max_length=100)


class SigninRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class UserRead(BaseModel):
    id: uuid.UUID
    email: str
    name: Optional[str] = None
    role: Role
    created_at: datetime

    model_config = {"from_attributes": True}


class SignupResponse(BaseModel):
    message: str = "User registered successfully"
    user: UserRead


class SigninResponse(BaseModel):
    """Issued token plus enough of the user for the client to render."""
    token: str
    token_type: str = "bearer"
    email: str
    name: Optional[str] = None
    role: Role
