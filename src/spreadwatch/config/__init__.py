"""Configuration module for the spread monitor."""

from spreadwatch.config.constants import (
    DEFAULT_REFRESH_INTERVAL_MS,
    ENDPOINT_MARKET_PAIRS,
    ENDPOINT_MARKET_SUMMARY,
    GREEN_SPREAD_THRESHOLD_PCT,
)
from spreadwatch.config.settings import Settings, get_settings


__all__ = [
    "Settings",
    "get_settings",
    "DEFAULT_REFRESH_INTERVAL_MS",
    "ENDPOINT_MARKET_PAIRS",
    "ENDPOINT_MARKET_SUMMARY",
    "GREEN_SPREAD_THRESHOLD_PCT",
]
