"""Client configuration loaded from TASKTRACK_* environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_session_file() -> Path:
    return Path.home() / ".config" / "tasktrack" / "session.json"


class ClientSettings(BaseSettings):
    """Settings for the API client and CLI."""

    model_config = SettingsConfigDict(
        env_prefix="TASKTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str = "http://localhost:8000/api/v1"
    session_file: Path = _default_session_file()
    timeout: float = 10.0
