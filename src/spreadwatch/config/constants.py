"""
Market data constants and configuration values.

This module contains the hardcoded values used throughout the spread monitor.
Values are organized by category for easy maintenance and auditing.
"""

from typing import Final


# =============================================================================
# Market Data API Endpoints
# =============================================================================

ENDPOINT_MARKET_PAIRS: Final[str] = "/market/pairs"
ENDPOINT_MARKET_SUMMARY: Final[str] = "/market/summary"

# Per-request timeout (seconds)
DEFAULT_REQUEST_TIMEOUT: Final[float] = 10.0


# =============================================================================
# Refresh Schedule
# =============================================================================

# Summaries-only refresh interval (milliseconds)
DEFAULT_REFRESH_INTERVAL_MS: Final[int] = 60_000

MIN_REFRESH_INTERVAL_MS: Final[int] = 1_000
MAX_REFRESH_INTERVAL_MS: Final[int] = 3_600_000


# =============================================================================
# Ticker Naming
# =============================================================================

# Identity feed: BASE_TARGET
TICKER_SEPARATOR: Final[str] = "_"

# Summary feed: BASE-TARGET
SUMMARY_PAIR_SEPARATOR: Final[str] = "-"

# Display form: BASE/TARGET
DISPLAY_PAIR_SEPARATOR: Final[str] = "/"


# =============================================================================
# Risk Classification
# =============================================================================

# Spreads at or below this percentage are green, above it amber
GREEN_SPREAD_THRESHOLD_PCT: Final[float] = 2.0

RAG_COLORS: Final[dict[str, str]] = {
    "green": "#4CAF50",
    "amber": "#FF9800",
    "red": "#F44336",
}
RAG_UNKNOWN_COLOR: Final[str] = "#9E9E9E"


# =============================================================================
# Display Formatting
# =============================================================================

# Prices below 1.0 get the wider precision
SMALL_PRICE_PRECISION: Final[int] = 6
PRICE_PRECISION: Final[int] = 2
SPREAD_PRECISION: Final[int] = 2

MISSING_VALUE: Final[str] = "-"


# =============================================================================
# Logging & Telemetry
# =============================================================================

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Maximum log queue size
MAX_LOG_QUEUE_SIZE: Final[int] = 10_000

# Samples kept per latency metric
LATENCY_WINDOW_SIZE: Final[int] = 500
