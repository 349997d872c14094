"""Telemetry module for logging, metrics, and reporting."""

from spreadwatch.telemetry.logger import AsyncLogger, setup_logging
from spreadwatch.telemetry.metrics import LatencyStats, MetricsCollector


__all__ = [
    "AsyncLogger",
    "LatencyStats",
    "MetricsCollector",
    "setup_logging",
]
