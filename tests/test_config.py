"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from receipt_processor.config import Settings


class TestSettings:
    """Test cases for Settings."""

    def test_defaults(self, monkeypatch):
        """Test the defaults when nothing is configured."""
        for name in ("HOST", "PORT", "DEBUG", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.port == 8080
        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_reads_environment(self, monkeypatch):
        """Test that environment variables override defaults."""
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.port == 9000
        assert settings.debug is True
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("field, value", [("port", 0), ("log_level", "LOUD")])
    def test_rejects_invalid_values(self, field, value):
        """Test that bad settings fail fast."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **{field: value})
