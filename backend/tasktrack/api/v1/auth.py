"""Authentication endpoints.

POST /register, POST /login, POST /logout, GET /me.

Security considerations:
- login: constant-time failure path via a dummy bcrypt check, one generic
  error for unknown email and wrong password
- register: bcrypt hash, email uniqueness, field-level validation errors
- logout: revokes every token of the user and clears the session cookie
"""

from fastapi import APIRouter, Response

from tasktrack.api.deps import CurrentUser, DbSession
from tasktrack.core.responses import DataResponse, MessageResponse
from tasktrack.core.security import clear_auth_cookie, set_auth_cookie
from tasktrack.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserRead,
)
from tasktrack.services.account_service import AccountService

router = APIRouter()


# ===================================================================
# POST /register
# ===================================================================


@router.post("/register", status_code=201)
async def register(body: RegisterRequest, db: DbSession) -> RegisterResponse:
    """Register a new user with name, email, and password.

    Unauthenticated. Returns the public user attributes; does not log in.
    """
    user = await AccountService(db).register_user(
        name=body.name, email=body.email, password=body.password
    )
    await db.commit()
    return RegisterResponse(user=UserRead.model_validate(user))


# ===================================================================
# POST /login
# ===================================================================


@router.post("/login")
async def login(body: LoginRequest, response: Response, db: DbSession) -> LoginResponse:
    """Verify email + password and issue a bearer token.

    The token is returned in the body for Authorization headers and also
    set as an httpOnly cookie for browser clients.
    """
    token, user = await AccountService(db).authenticate(
        email=body.email, password=body.password, token_name=body.device_name
    )
    await db.commit()
    set_auth_cookie(response, token)
    return LoginResponse(token=token, user=UserRead.model_validate(user))


# ===================================================================
# POST /logout
# ===================================================================


@router.post("/logout")
async def logout(user: CurrentUser, response: Response, db: DbSession) -> MessageResponse:
    """Revoke all of the current user's tokens.

    Every session of the user ends, not only the one making this request.
    """
    await AccountService(db).revoke_all_tokens(user.id)
    await db.commit()
    clear_auth_cookie(response)
    return MessageResponse(message="Logged out")


# ===================================================================
# GET /me
# ===================================================================


@router.get("/me")
async def me(user: CurrentUser) -> DataResponse[UserRead]:
    """Return the authenticated user's public attributes."""
    return DataResponse(data=UserRead.model_validate(user))
