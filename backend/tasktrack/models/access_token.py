"""Access token model - opaque bearer credentials.

One row per successful login. The plain token is handed to the client
once and only its SHA-256 hash is kept. Logout deletes every row of the
user.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tasktrack.models.base import Base

if TYPE_CHECKING:
    from tasktrack.models.user import User


class AccessToken(Base):
    """Bearer token issued to a user at login.

    Attributes:
        id: UUID primary key.
        user_id: FK to users table.
        name: Label of the client the token was issued to.
        token_hash: SHA-256 hex digest of the plain token.
        created_at: Issued-at timestamp.
        expires_at: Expiry timestamp. NULL = valid until revoked.
    """

    __tablename__ = "access_tokens"

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
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        default="api",
    )
    token_hash: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    expires_at: Mapped[datetime | None] = mapped_column(
        nullable=True,
    )

    user: Mapped["User"] = relationship("User", back_populates="access_tokens")
