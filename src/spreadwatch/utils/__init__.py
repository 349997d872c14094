"""Utility functions for the spread monitor."""

from spreadwatch.utils.math import parse_price
from spreadwatch.utils.time import (
    LatencyTimer,
    format_timestamp_ms,
    get_timestamp_ms,
    get_timestamp_us,
)


__all__ = [
    "LatencyTimer",
    "format_timestamp_ms",
    "get_timestamp_ms",
    "get_timestamp_us",
    "parse_price",
]
