"""Todo model - a task owned by exactly one user."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String, Uuid, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tasktrack.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from tasktrack.models.user import User


class Todo(Base, TimestampMixin):
    """A todo item.

    Attributes:
        id: UUID primary key.
        user_id: FK to the owning user. Never changes after creation.
        title: Non-empty task title.
        completed: Completion flag. Defaults to False.
        created_at: Creation timestamp (from TimestampMixin).
        updated_at: Last modification timestamp (from TimestampMixin).
    """

    __tablename__ = "todos"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        server_default=false(),
        default=False,
    )

    user: Mapped["User"] = relationship("User", back_populates="todos")
