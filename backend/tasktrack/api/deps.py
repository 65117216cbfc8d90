"""Shared dependencies for API endpoints.

Auth Gate and Ownership Guard. Every protected route declares CurrentUser
(or OwnedTodo, which depends on it), so the credential check runs before
any handler body and is never re-implemented per route.

Credential sources, in order:
1. Authorization: Bearer <token> header
2. Session cookie (settings.auth_cookie_name), set by POST /login
"""

import uuid
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from tasktrack.core.config import settings
from tasktrack.core.database import get_db
from tasktrack.core.errors import ForbiddenError, NotFoundError, UnauthorizedError
from tasktrack.models import Todo, User
from tasktrack.repositories.todo_repository import TodoRepository
from tasktrack.services.account_service import AccountService

_BEARER_SCHEME = "bearer"


def extract_token(request: Request) -> str | None:
    """Read the raw credential from the request.

    A present Authorization header wins over the cookie, even when it is
    malformed, so a bad header is never silently replaced by a cookie.

    Args:
        request: HTTP request.

    Returns:
        The token string, or None if absent or malformed.
    """
    header = request.headers.get("Authorization")
    if header is not None:
        scheme, _, value = header.partition(" ")
        if scheme.lower() != _BEARER_SCHEME:
            return None
        return value.strip() or None

    return request.cookies.get(settings.auth_cookie_name) or None


async def get_current_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """Resolve the request's credential to a User.

    Security: the 401 message is the same for every failure (missing,
    malformed, unknown, expired, revoked) to avoid leaking why auth failed.

    Args:
        request: HTTP request (injected by FastAPI).
        db: Database session (injected).

    Returns:
        The authenticated User. The matching AccessToken row is stored on
        request.state.access_token.

    Raises:
        UnauthorizedError: For any auth failure.
    """
    token = extract_token(request)
    if token is None:
        raise UnauthorizedError()

    resolved = await AccountService(db).resolve_token(token)
    if resolved is None:
        raise UnauthorizedError()

    access_token, user = resolved
    request.state.access_token = access_token
    return user


# Reusable type aliases for dependency injection
CurrentUser = Annotated[User, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_owned_todo(
    todo_id: str,
    user: CurrentUser,
    db: DbSession,
) -> Todo:
    """Load a todo and check the current user owns it.

    Args:
        todo_id: Path parameter. Anything that is not a UUID cannot match
            a todo and is reported as not found.
        user: Authenticated user (injected by get_current_user).
        db: Database session (injected).

    Returns:
        The Todo, guaranteed to belong to ``user``.

    Raises:
        NotFoundError: No todo with that id exists (or the id is malformed).
        ForbiddenError: The todo belongs to another user.
    """
    try:
        parsed_id = uuid.UUID(todo_id)
    except ValueError as exc:
        raise NotFoundError("Todo", todo_id) from exc

    todo = await TodoRepository.get_by_id(db, parsed_id)
    if todo is None:
        raise NotFoundError("Todo", todo_id)
    if todo.user_id != user.id:
        raise ForbiddenError("You do not own this todo")
    return todo


OwnedTodo = Annotated[Todo, Depends(get_owned_todo)]
