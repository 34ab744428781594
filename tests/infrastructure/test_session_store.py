"""Tests for the session file store."""

import json
from pathlib import Path

from cnc_library.domain import UserRole
from cnc_library.infrastructure.session_store import SessionStore
from tests.conftest import make_user


class TestSessionStore:
    """Tests for SessionStore."""

    def test_missing_file(self, session_file: Path) -> None:
        assert SessionStore(session_file).load() is None

    def test_save_and_load(self, tmp_path: Path) -> None:
        """The user survives a round trip through a nested directory."""
        store = SessionStore(tmp_path / "nested" / "session.json")
        user = make_user(UserRole.ADMIN, user_id=1)

        store.save(user)

        assert store.load() == user

    def test_file_uses_backend_field_names(self, session_file: Path) -> None:
        SessionStore(session_file).save(make_user(UserRole.DEALER))

        data = json.loads(session_file.read_text("utf-8"))

        assert data == {"userId": 7, "username": "dealer1", "role": "DEALER", "token": "tok-123"}

    def test_corrupt_file_is_ignored(self, session_file: Path) -> None:
        session_file.write_text("{not json", encoding="utf-8")

        assert SessionStore(session_file).load() is None

    def test_clear(self, session_file: Path) -> None:
        store = SessionStore(session_file)
        store.save(make_user())

        store.clear()
        store.clear()

        assert not session_file.exists()
