"""SQLAlchemy ORM models for Tasktrack.

All models are exported from this module for convenient imports:
    from tasktrack.models import User, AccessToken, Todo

- user.py: User
- access_token.py: AccessToken (bearer tokens, FK users)
- todo.py: Todo (FK users)
"""

from tasktrack.models.access_token import AccessToken
from tasktrack.models.base import Base, TimestampMixin
from tasktrack.models.todo import Todo
from tasktrack.models.user import User

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    # Identity
    "User",
    "AccessToken",
    # Tasks
    "Todo",
]
