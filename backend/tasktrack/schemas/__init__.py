"""Pydantic request/response schemas for API endpoints."""

from tasktrack.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserRead,
)
from tasktrack.schemas.todo import TodoCreate, TodoRead, TodoUpdate

__all__ = [
    # Auth
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "UserRead",
    # Todos
    "TodoCreate",
    "TodoRead",
    "TodoUpdate",
]
