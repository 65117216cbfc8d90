"""Persistent storage for the client's bearer token.

FileTokenStore keeps the session in a JSON file readable only by the
owner; MemoryTokenStore is for tests and short-lived scripts.
"""

import json
import logging
import os
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

# Owner read/write only
_SESSION_FILE_MODE = 0o600


class StoredSession(BaseModel):
    """What the client remembers between runs."""

    model_config = ConfigDict(extra="ignore")

    token: str
    user: dict | None = None


class TokenStore(Protocol):
    """Storage backend for the client session."""

    def load(self) -> StoredSession | None: ...

    def save(self, session: StoredSession) -> None: ...

    def clear(self) -> None: ...


class MemoryTokenStore:
    """In-process token store."""

    def __init__(self, session: StoredSession | None = None) -> None:
        self._session = session

    def load(self) -> StoredSession | None:
        return self._session

    def save(self, session: StoredSession) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None


class FileTokenStore:
    """JSON file token store.

    A missing, unreadable, or corrupt file is treated as "no session".

    Args:
        path: Location of the session file. Parent directories are created
            on save.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> StoredSession | None:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError:
            logger.warning("Could not read session file %s", self.path)
            return None

        try:
            return StoredSession.model_validate(json.loads(raw.decode("utf-8")))
        # UnicodeDecodeError and pydantic ValidationError are ValueErrors too
        except ValueError:
            logger.warning("Ignoring corrupt session file %s", self.path)
            return None

    def save(self, session: StoredSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _SESSION_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(session.model_dump_json())
        # O_CREAT mode does not apply to an existing file
        os.chmod(self.path, _SESSION_FILE_MODE)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
