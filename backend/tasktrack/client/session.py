"""HTTP client with a persistent bearer-token session.

Usage:
    with TasktrackClient(store=FileTokenStore(path)) as client:
        client.login("a@example.com", "secret1")
        client.create_todo("buy milk")

Rules:
- login stores the issued token; every protected call sends it as
  ``Authorization: Bearer <token>``
- a protected call with no stored token raises NotAuthenticatedError
  without touching the network
- any 401 on a protected call clears the store and raises
  SessionExpiredError; nothing is retried
- logout always clears the store, even if the server call fails
"""

import logging
import uuid
from collections.abc import Generator
from typing import Any

import httpx

from tasktrack.client.errors import (
    ApiClientError,
    NotAuthenticatedError,
    SessionExpiredError,
)
from tasktrack.client.token_store import MemoryTokenStore, StoredSession, TokenStore

logger = logging.getLogger(__name__)

_DEFAULT_API_URL = "http://localhost:8000/api/v1"


class BearerTokenAuth(httpx.Auth):
    """httpx auth flow that reads the token from the store on every request."""

    def __init__(self, store: TokenStore) -> None:
        self._store = store

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        session = self._store.load()
        if session is None:
            raise NotAuthenticatedError()
        request.headers["Authorization"] = f"Bearer {session.token}"
        yield request


def _error_from_response(response: httpx.Response) -> ApiClientError:
    try:
        error = response.json().get("error") or {}
    except ValueError:
        error = {}
    return ApiClientError(
        status_code=response.status_code,
        code=error.get("code", "HTTP_ERROR"),
        message=error.get("message", response.reason_phrase or "Request failed"),
        details=error.get("details"),
    )


class TasktrackClient:
    """Synchronous client for the Tasktrack API.

    Args:
        base_url: API root including the version prefix.
        store: Where the session token lives. Defaults to memory only.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: str = _DEFAULT_API_URL,
        *,
        store: TokenStore | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.store = store if store is not None else MemoryTokenStore()
        self._auth = BearerTokenAuth(self.store)
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> "TasktrackClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    # -----------------------------------------------------------------------
    # Plumbing
    # -----------------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        """Whether a token is stored. Says nothing about server validity."""
        return self.store.load() is not None

    def _public(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._http.request(method, path, **kwargs)
        if response.is_error:
            raise _error_from_response(response)
        return response.json()

    def _protected(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._http.request(method, path, auth=self._auth, **kwargs)
        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.info("Server rejected stored token; clearing session")
            self.store.clear()
            raise SessionExpiredError()
        if response.is_error:
            raise _error_from_response(response)
        if response.status_code == httpx.codes.NO_CONTENT:
            return None
        return response.json()

    # -----------------------------------------------------------------------
    # Auth
    # -----------------------------------------------------------------------

    def register(self, name: str, email: str, password: str) -> dict:
        """Create an account. Does not log in."""
        body = self._public(
            "POST",
            "/register",
            json={"name": name, "email": email, "password": password},
        )
        return body["user"]

    def login(self, email: str, password: str, *, device_name: str = "cli") -> dict:
        """Log in and persist the issued token.

        Returns:
            Public user attributes.
        """
        body = self._public(
            "POST",
            "/login",
            json={"email": email, "password": password, "device_name": device_name},
        )
        self.store.save(StoredSession(token=body["token"], user=body["user"]))
        return body["user"]

    def logout(self) -> None:
        """Revoke the session server-side and forget it locally.

        Local state is discarded even when the server call fails or the
        token was already invalid.
        """
        try:
            if self.is_authenticated:
                self._protected("POST", "/logout")
        except SessionExpiredError:
            pass
        finally:
            self.store.clear()

    def me(self) -> dict:
        return self._protected("GET", "/me")["data"]

    # -----------------------------------------------------------------------
    # Todos
    # -----------------------------------------------------------------------

    def list_todos(self) -> list[dict]:
        return self._protected("GET", "/todos")["data"]

    def get_todo(self, todo_id: uuid.UUID | str) -> dict:
        return self._protected("GET", f"/todos/{todo_id}")["data"]

    def create_todo(self, title: str) -> dict:
        return self._protected("POST", "/todos", json={"title": title})["data"]

    def update_todo(
        self,
        todo_id: uuid.UUID | str,
        *,
        title: str | None = None,
        completed: bool | None = None,
    ) -> dict:
        """Send only the fields that were given."""
        changes: dict[str, Any] = {}
        if title is not None:
            changes["title"] = title
        if completed is not None:
            changes["completed"] = completed
        return self._protected("PATCH", f"/todos/{todo_id}", json=changes)["data"]

    def delete_todo(self, todo_id: uuid.UUID | str) -> None:
        self._protected("DELETE", f"/todos/{todo_id}")
