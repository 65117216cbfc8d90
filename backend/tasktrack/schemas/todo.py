"""Todo request/response schemas.

All schemas use ConfigDict(extra="forbid") on input to reject unexpected
fields such as user_id.
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

_MAX_TITLE_LENGTH = 255


def _validate_title(value: str | None) -> str:
    """Strip the title and require at least one visible character."""
    if value is None:
        msg = "title may not be null"
        raise ValueError(msg)
    stripped = value.strip()
    if not stripped:
        msg = "title must not be empty"
        raise ValueError(msg)
    return stripped


class TodoCreate(BaseModel):
    """Request body for POST /todos."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(max_length=_MAX_TITLE_LENGTH)

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str) -> str:
        return _validate_title(value)


class TodoUpdate(BaseModel):
    """Request body for PUT/PATCH /todos/{id}.

    Any subset of fields; omitted fields stay unchanged. Explicit nulls are
    rejected rather than treated as "unset".
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, max_length=_MAX_TITLE_LENGTH)
    completed: bool | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, value: str | None) -> str:
        return _validate_title(value)

    @field_validator("completed")
    @classmethod
    def check_completed(cls, value: bool | None) -> bool:
        if value is None:
            msg = "completed may not be null"
            raise ValueError(msg)
        return value

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TodoRead(BaseModel):
    """Todo as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    completed: bool
    created_at: datetime
    updated_at: datetime
