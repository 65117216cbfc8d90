"""Repository for AccessToken operations.

Tokens are looked up by the SHA-256 hash of the presented bearer value.
Expired rows are treated as absent but are not deleted on read.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.models.access_token import AccessToken


class AccessTokenRepository:
    """Stateless repository for AccessToken table operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        user_id: uuid.UUID,
        token_hash: str,
        name: str = "api",
        expires_at: datetime | None = None,
    ) -> AccessToken:
        """Store a newly issued token.

        Args:
            db: Async database session.
            user_id: Owner of the token.
            token_hash: SHA-256 hex digest of the plain token.
            name: Label of the issuing client.
            expires_at: Expiry timestamp, None for no expiry.

        Returns:
            Created AccessToken.
        """
        token = AccessToken(
            user_id=user_id,
            token_hash=token_hash,
            name=name,
            expires_at=expires_at,
        )
        db.add(token)
        await db.flush()
        await db.refresh(token)
        return token

    @staticmethod
    async def get_active_by_hash(
        db: AsyncSession,
        token_hash: str,
        *,
        now: datetime | None = None,
    ) -> AccessToken | None:
        """Fetch a token by hash if it exists and has not expired.

        Args:
            db: Async database session.
            token_hash: SHA-256 hex digest of the presented token.
            now: Reference time for the expiry check. Defaults to now (UTC).

        Returns:
            AccessToken if active, None otherwise.
        """
        reference = now or datetime.now(UTC)
        stmt = select(AccessToken).where(
            AccessToken.token_hash == token_hash,
            or_(
                AccessToken.expires_at.is_(None),
                AccessToken.expires_at > reference,
            ),
        )
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def delete_for_user(db: AsyncSession, user_id: uuid.UUID) -> int:
        """Delete every token belonging to a user.

        Args:
            db: Async database session.
            user_id: Owner whose tokens are revoked.

        Returns:
            Number of rows deleted (0 when the user had none).
        """
        stmt = delete(AccessToken).where(AccessToken.user_id == user_id)
        result = await db.execute(stmt)
        await db.flush()
        return result.rowcount or 0
