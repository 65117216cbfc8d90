"""Python client for the Tasktrack API.

TasktrackClient keeps the bearer token in a TokenStore, attaches it to every
protected request, and drops it on logout or on any 401.
"""

from tasktrack.client.errors import (
    ApiClientError,
    NotAuthenticatedError,
    SessionExpiredError,
)
from tasktrack.client.session import TasktrackClient
from tasktrack.client.token_store import (
    FileTokenStore,
    MemoryTokenStore,
    StoredSession,
    TokenStore,
)

__all__ = [
    "ApiClientError",
    "FileTokenStore",
    "MemoryTokenStore",
    "NotAuthenticatedError",
    "SessionExpiredError",
    "StoredSession",
    "TasktrackClient",
    "TokenStore",
]
