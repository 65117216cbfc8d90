"""Account service: registration, login, logout, and token resolution.

Business logic behind the auth endpoints and the Auth Gate. Holds no state
of its own; every call goes through the injected AsyncSession.

Security considerations:
- Passwords are only ever compared through bcrypt (verify_password_or_dummy)
- Unknown email and wrong password raise the same InvalidCredentialsError
- Tokens are random, returned once, and stored as SHA-256 hashes
- Logout revokes every token of the user, not just the current one
"""

import uuid

import structlog
from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.core.errors import (
    EmailTakenError,
    InvalidCredentialsError,
    ValidationError,
)
from tasktrack.core.security import (
    generate_token,
    hash_password,
    hash_token,
    token_expiry,
    verify_password_or_dummy,
)
from tasktrack.models import AccessToken, User
from tasktrack.repositories.access_token_repository import AccessTokenRepository
from tasktrack.repositories.user_repository import UserRepository

logger = structlog.get_logger()

MIN_PASSWORD_LENGTH = 6
# bcrypt ignores everything past the first 72 bytes of input
MAX_PASSWORD_BYTES = 72
MAX_NAME_LENGTH = 255


def _field_error(field: str, message: str, error_type: str) -> dict:
    return {"field": field, "message": message, "type": error_type}


def validate_registration(name: str, email: str, password: str) -> list[dict]:
    """Check registration input without touching the database.

    Args:
        name: Display name.
        email: Email address.
        password: Plain-text password.

    Returns:
        Field-level error entries; empty when the input is acceptable.
    """
    errors: list[dict] = []

    if not name or not name.strip():
        errors.append(_field_error("name", "The name field is required.", "required"))
    elif len(name.strip()) > MAX_NAME_LENGTH:
        errors.append(
            _field_error(
                "name",
                f"The name may not be greater than {MAX_NAME_LENGTH} characters.",
                "max_length",
            )
        )

    if not email or not email.strip():
        errors.append(
            _field_error("email", "The email field is required.", "required")
        )
    else:
        try:
            validate_email(email.strip(), check_deliverability=False)
        except EmailNotValidError:
            errors.append(
                _field_error(
                    "email", "The email must be a valid email address.", "email"
                )
            )

    if not password:
        errors.append(
            _field_error("password", "The password field is required.", "required")
        )
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors.append(
            _field_error(
                "password",
                f"The password must be at least {MIN_PASSWORD_LENGTH} characters.",
                "min_length",
            )
        )
    elif len(password.encode()) > MAX_PASSWORD_BYTES:
        errors.append(
            _field_error(
                "password",
                f"The password may not be greater than {MAX_PASSWORD_BYTES} bytes.",
                "max_length",
            )
        )

    return errors


class AccountService:
    """Credential Store and Token Issuer operations.

    Args:
        db: Async database session. The caller (get_db) owns commit/rollback.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def register_user(self, *, name: str, email: str, password: str) -> User:
        """Create a user with a bcrypt-hashed password.

        Args:
            name: Display name.
            email: Email address (stored lowercase).
            password: Plain-text password, at least 6 characters.

        Returns:
            The created User.

        Raises:
            ValidationError: If any field is missing or malformed.
            EmailTakenError: If the email is already registered.
        """
        errors = validate_registration(name, email, password)
        if errors:
            raise ValidationError("The given data was invalid.", details=errors)

        if await UserRepository.get_by_email(self._db, email) is not None:
            raise EmailTakenError()

        try:
            user = await UserRepository.create(
                self._db,
                name=name.strip(),
                email=email,
                password_hash=hash_password(password),
            )
        except IntegrityError as exc:
            # Lost a race with a concurrent registration of the same email
            await self._db.rollback()
            raise EmailTakenError() from exc

        logger.info("User registered", user_id=str(user.id))
        return user

    async def authenticate(
        self, *, email: str, password: str, token_name: str = "api"
    ) -> tuple[str, User]:
        """Verify credentials and issue a new bearer token.

        Args:
            email: Email address (case-insensitive).
            password: Plain-text password.
            token_name: Label stored with the token.

        Returns:
            Tuple of (plain token, user). The plain token is not stored.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password.
        """
        user = await UserRepository.get_by_email(self._db, email)

        password_hash = user.password_hash if user else None
        if not verify_password_or_dummy(password, password_hash) or user is None:
            logger.info("Login failed")
            raise InvalidCredentialsError()

        plain_token = generate_token()
        await AccessTokenRepository.create(
            self._db,
            user_id=user.id,
            token_hash=hash_token(plain_token),
            name=token_name,
            expires_at=token_expiry(),
        )

        logger.info("Login succeeded", user_id=str(user.id))
        return plain_token, user

    async def revoke_all_tokens(self, user_id: uuid.UUID) -> int:
        """Delete every token of a user.

        Idempotent: returns 0 when the user has no tokens left.

        Args:
            user_id: User whose tokens are revoked.

        Returns:
            Number of tokens removed.
        """
        removed = await AccessTokenRepository.delete_for_user(self._db, user_id)
        logger.info("Tokens revoked", user_id=str(user_id), count=removed)
        return removed

    async def resolve_token(self, token: str) -> tuple[AccessToken, User] | None:
        """Map a presented bearer token to its active token row and user.

        Read-only: token state is not modified.

        Args:
            token: Plain bearer token from the request.

        Returns:
            (AccessToken, User) if the token is known, unexpired, and its
            user still exists; None otherwise.
        """
        if not token:
            return None

        access_token = await AccessTokenRepository.get_active_by_hash(
            self._db, hash_token(token)
        )
        if access_token is None:
            return None

        user = await UserRepository.get_by_id(self._db, access_token.user_id)
        if user is None:
            return None

        return access_token, user
