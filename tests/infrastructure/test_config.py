"""Tests for settings and logging setup."""

import logging
from pathlib import Path
from unittest.mock import patch

import pydantic
import pytest
import structlog

from cnc_library.infrastructure.config import Settings
from cnc_library.infrastructure.logging import configure_logging


class TestSettings:
    """Tests for Settings configuration."""

    def test_default_settings(self):
        """Test default settings values."""
        with patch.dict("os.environ", {}, clear=True):
            settings = Settings()
            assert settings.api_url == "http://localhost:8080/api"
            assert settings.request_timeout == 30.0
            assert settings.page_size == 24
            assert settings.log_level == "INFO"
            assert settings.log_json is False

    def test_settings_from_env(self):
        """Test settings from environment variables."""
        env_vars = {
            "CNC_API_URL": "http://library:9000/api",
            "CNC_PAGE_SIZE": "10",
            "CNC_SESSION_FILE": "/tmp/cnc-session.json",
            "CNC_LOG_LEVEL": "DEBUG",
            "CNC_LOG_JSON": "true",
        }
        with patch.dict("os.environ", env_vars, clear=False):
            settings = Settings()
            assert settings.api_url == "http://library:9000/api"
            assert settings.page_size == 10
            assert settings.session_file == Path("/tmp/cnc-session.json")
            assert settings.log_level == "DEBUG"
            assert settings.log_json is True

    def test_page_size_must_be_positive(self):
        """Test page size validation."""
        with patch.dict("os.environ", {"CNC_PAGE_SIZE": "0"}, clear=False):
            with pytest.raises(pydantic.ValidationError):
                Settings()


class TestLogging:
    """Tests for logging configuration."""

    def test_configure_logging(self):
        """Test the root level follows the configured name."""
        configure_logging("warning", json=True)

        assert logging.getLogger().level == logging.WARNING
        assert structlog.is_configured()
