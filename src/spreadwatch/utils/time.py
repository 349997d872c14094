"""
Clock helpers.

Dataset freshness is tracked as Unix milliseconds; reconciliation
latency is measured in microseconds.
"""

import time
from datetime import UTC, datetime


def get_timestamp_us() -> int:
    """Current Unix time in microseconds."""
    return time.time_ns() // 1000


def get_timestamp_ms() -> int:
    """Current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


def format_timestamp_ms(timestamp_ms: int | None, include_date: bool = False) -> str:
    """
    Render a "last updated" time in UTC.

    Args:
        timestamp_ms: Unix milliseconds, or None if the dataset was never
            published.
        include_date: Prefix the calendar date.

    Returns:
        ``HH:MM:SS.mmm`` (optionally date-prefixed), or "never".

    Example:
        >>> format_timestamp_ms(1704067200123)
        '00:00:00.123'
        >>> format_timestamp_ms(None)
        'never'
    """
    if timestamp_ms is None:
        return "never"

    seconds, millis = divmod(timestamp_ms, 1000)
    fmt = "%Y-%m-%d %H:%M:%S" if include_date else "%H:%M:%S"
    return f"{datetime.fromtimestamp(seconds, tz=UTC).strftime(fmt)}.{millis:03d}"


class LatencyTimer:
    """
    Measures the wall time of a block in microseconds.

    Example:
        >>> with LatencyTimer() as timer:
        ...     records = reconcile(identities, summaries)
        >>> timer.latency_us
    """

    __slots__ = ("start_us", "latency_us")

    def __init__(self) -> None:
        self.start_us = 0
        self.latency_us = 0

    def __enter__(self) -> "LatencyTimer":
        self.start_us = get_timestamp_us()
        return self

    def __exit__(self, *args: object) -> None:
        self.latency_us = get_timestamp_us() - self.start_us
