"""
Unit tests for application settings.
"""

import pytest
from pydantic import ValidationError

from spreadwatch.config.constants import DEFAULT_REFRESH_INTERVAL_MS, DEFAULT_REQUEST_TIMEOUT
from spreadwatch.config.settings import Settings, get_settings
from spreadwatch.utils.time import format_timestamp_ms


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        """Test default values."""
        settings = Settings(_env_file=None, api_base_url="https://api.example.com")  # type: ignore[call-arg]

        assert settings.refresh_interval_ms == DEFAULT_REFRESH_INTERVAL_MS
        assert settings.refresh_interval_s == 60.0
        assert settings.request_timeout_s == DEFAULT_REQUEST_TIMEOUT
        assert settings.log_level == "INFO"
        assert settings.log_file is None

    def test_strips_trailing_slash(self) -> None:
        """Test the base URL is normalized."""
        settings = Settings(_env_file=None, api_base_url="https://api.example.com/v1/")  # type: ignore[call-arg]

        assert settings.api_base_url == "https://api.example.com/v1"

    def test_rejects_non_http_url(self) -> None:
        """Test the base URL scheme is checked."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, api_base_url="ftp://api.example.com")  # type: ignore[call-arg]

    def test_requires_base_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the base URL has no default."""
        monkeypatch.delenv("API_BASE_URL", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_interval_bounds(self) -> None:
        """Test out-of-range refresh intervals are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, api_base_url="http://x", refresh_interval_ms=10)  # type: ignore[call-arg]

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test values are read from environment variables."""
        monkeypatch.setenv("API_BASE_URL", "http://localhost:9000/")
        monkeypatch.setenv("REFRESH_INTERVAL_MS", "5000")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.api_base_url == "http://localhost:9000"
        assert settings.refresh_interval_ms == 5000
        assert settings.log_level == "DEBUG"

    def test_get_settings_cached(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test get_settings returns one shared instance."""
        monkeypatch.setenv("API_BASE_URL", "http://localhost:9000")
        get_settings.cache_clear()

        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()


class TestFormatTimestamp:
    """Tests for format_timestamp_ms."""

    def test_never(self) -> None:
        """Test a missing timestamp."""
        assert format_timestamp_ms(None) == "never"

    def test_time_only(self) -> None:
        """Test UTC time with milliseconds."""
        assert format_timestamp_ms(1704067200123) == "00:00:00.123"

    def test_with_date(self) -> None:
        """Test the date prefix."""
        assert format_timestamp_ms(1704067200123, include_date=True) == "2024-01-01 00:00:00.123"
