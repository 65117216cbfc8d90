"""Auth request/response schemas.

Registration fields are plain strings here: the field rules (required,
email format, password length) live in AccountService so that direct
callers and HTTP callers get the same field-level errors.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request body for POST /register."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=1024)
    email: str = Field(max_length=1024)
    password: str = Field(max_length=1024)


class LoginRequest(BaseModel):
    """Request body for POST /login."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1, max_length=128)
    device_name: str = Field("api", min_length=1, max_length=100)


class UserRead(BaseModel):
    """Public user attributes. The password hash is never included."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    email: str
    created_at: datetime


class RegisterResponse(BaseModel):
    """Response body for POST /register."""

    user: UserRead


class LoginResponse(BaseModel):
    """Response body for POST /login.

    ``token`` is the only copy of the plain bearer token; the server keeps
    its hash.
    """

    token: str
    token_type: str = "Bearer"
    user: UserRead
