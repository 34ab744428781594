"""Application configuration.

Loads settings from environment variables (prefix ``CNC_``) and an optional
``.env`` file, with defaults suited to a local backend.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    # Backend
    api_url: str = Field(
        default="http://localhost:8080/api",
        description="Library REST API base URL",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP request timeout in seconds",
    )

    # Catalog
    page_size: int = Field(
        default=24,
        ge=1,
        le=200,
        description="Entries fetched per catalog page",
    )

    # Session
    session_file: Path = Field(
        default=Path.home() / ".cnc-library" / "session.json",
        description="Where the logged-in user is remembered between runs",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = {
        "env_prefix": "CNC_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Get the settings singleton."""
    return Settings()


settings = get_settings()
