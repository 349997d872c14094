"""
Application settings with environment variable support.

Uses Pydantic Settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from spreadwatch.config.constants import (
    DEFAULT_REFRESH_INTERVAL_MS,
    DEFAULT_REQUEST_TIMEOUT,
    MAX_REFRESH_INTERVAL_MS,
    MIN_REFRESH_INTERVAL_MS,
)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables
    (e.g. ``API_BASE_URL``, ``REFRESH_INTERVAL_MS``).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Market Data Source
    # =========================================================================

    api_base_url: str = Field(
        ...,
        description="Base URL of the market data API (serves /market/pairs and /market/summary)",
    )

    request_timeout_s: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        ge=0.5,
        le=120.0,
        description="Total timeout for a single HTTP request in seconds",
    )

    # =========================================================================
    # Refresh Schedule
    # =========================================================================

    refresh_interval_ms: int = Field(
        default=DEFAULT_REFRESH_INTERVAL_MS,
        ge=MIN_REFRESH_INTERVAL_MS,
        le=MAX_REFRESH_INTERVAL_MS,
        description="Interval between summaries-only refreshes in milliseconds",
    )

    # =========================================================================
    # Operation Mode
    # =========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )

    log_file: Path | None = Field(
        default=None,
        description="Optional file to mirror log output into",
    )

    use_uvloop: bool = Field(
        default=True,
        description="Use uvloop for the event loop when available",
    )

    # =========================================================================
    # CLI Monitor
    # =========================================================================

    report_interval_s: float = Field(
        default=1.0,
        ge=0.1,
        le=60.0,
        description="Redraw interval of the terminal monitor in seconds",
    )

    max_rows: int = Field(
        default=30,
        ge=1,
        le=500,
        description="Maximum number of pairs shown by the terminal monitor",
    )

    # =========================================================================
    # Dashboard
    # =========================================================================

    dashboard_host: str = Field(default="0.0.0.0")
    dashboard_port: int = Field(default=8000, ge=1, le=65535)

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("api_base_url", mode="after")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop the trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_base_url must start with http:// or https://")
        return v.rstrip("/")

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def refresh_interval_s(self) -> float:
        """Refresh interval in seconds."""
        return self.refresh_interval_ms / 1000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded only once.
    Clear cache with `get_settings.cache_clear()` if needed.
    """
    return Settings()  # type: ignore[call-arg, unused-ignore]
