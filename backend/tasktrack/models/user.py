"""User model - identity records for registration and login."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tasktrack.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from tasktrack.models.access_token import AccessToken
    from tasktrack.models.todo import Todo

_CASCADE_ALL_DELETE_ORPHAN = "all, delete-orphan"


class User(Base, TimestampMixin):
    """Registered user.

    Attributes:
        id: UUID primary key.
        name: Display name.
        email: Unique email address, stored lowercase.
        password_hash: bcrypt hash. Never serialized to clients.
        created_at: Account creation timestamp (from TimestampMixin).
        updated_at: Last modification timestamp (from TimestampMixin).
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Relationships
    access_tokens: Mapped[list["AccessToken"]] = relationship(
        "AccessToken",
        back_populates="user",
        cascade=_CASCADE_ALL_DELETE_ORPHAN,
    )
    todos: Mapped[list["Todo"]] = relationship(
        "Todo",
        back_populates="user",
        cascade=_CASCADE_ALL_DELETE_ORPHAN,
    )
