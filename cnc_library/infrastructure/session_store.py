"""File-backed storage for the logged-in user.

Keeps the authenticated user (including its bearer token) between runs.
"""

from pathlib import Path

import pydantic
import structlog

from cnc_library.domain import AuthUser
from cnc_library.infrastructure.schemas import AuthUserSchema

logger = structlog.get_logger()


class SessionStore:
    """Reads and writes the session JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> AuthUser | None:
        """Load the stored user.

        Returns:
            The stored user, or None when nothing usable is stored.
        """
        if not self.path.exists():
            return None
        try:
            schema = AuthUserSchema.model_validate_json(self.path.read_text("utf-8"))
        except (OSError, pydantic.ValidationError) as e:
            logger.warning("Ignoring unreadable session file", path=str(self.path), error=str(e))
            return None
        return schema.to_domain()

    def save(self, user: AuthUser) -> None:
        """Persist the user."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            AuthUserSchema.from_domain(user).model_dump_json(by_alias=True),
            encoding="utf-8",
        )

    def clear(self) -> None:
        """Forget the stored user."""
        self.path.unlink(missing_ok=True)
