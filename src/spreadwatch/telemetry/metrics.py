"""
Refresh health metrics.

Counts full loads and periodic refresh outcomes and keeps a rolling
window of reconciliation latencies per operation. Everything lives in
memory and is reset with the process.
"""

import time
from collections import deque
from dataclasses import dataclass

from spreadwatch.config.constants import LATENCY_WINDOW_SIZE
from spreadwatch.core.types import RefreshOutcome
from spreadwatch.utils.time import get_timestamp_ms


# Counter names per refresh outcome
_REFRESH_COUNTERS: dict[RefreshOutcome, str] = {
    RefreshOutcome.APPLIED: "refreshes",
    RefreshOutcome.FAILED: "refresh_failures",
    RefreshOutcome.SKIPPED: "refreshes_skipped",
}


@dataclass
class LatencyStats:
    """Aggregated latency statistics."""

    min_us: int = 0
    max_us: int = 0
    avg_us: float = 0.0
    p50_us: int = 0
    p95_us: int = 0
    p99_us: int = 0
    count: int = 0


class LatencyWindow:
    """Fixed-size window of latency samples in microseconds."""

    __slots__ = ("_samples",)

    def __init__(self, size: int) -> None:
        self._samples: deque[int] = deque(maxlen=size)

    def add(self, latency_us: int) -> None:
        self._samples.append(latency_us)

    def __len__(self) -> int:
        return len(self._samples)

    def stats(self) -> LatencyStats:
        """Summarize the samples currently in the window."""
        if not self._samples:
            return LatencyStats()

        ordered = sorted(self._samples)
        last = len(ordered) - 1

        def pct(q: float) -> int:
            return ordered[min(last, int(len(ordered) * q))]

        return LatencyStats(
            min_us=ordered[0],
            max_us=ordered[-1],
            avg_us=sum(ordered) / len(ordered),
            p50_us=pct(0.50),
            p95_us=pct(0.95),
            p99_us=pct(0.99),
            count=len(ordered),
        )


class MetricsCollector:
    """
    Load and refresh bookkeeping for one controller.

    Counters:
        full_loads, load_failures: initial loads and manual refetches
        refreshes, refresh_failures, refreshes_skipped: timer ticks

    Latency windows:
        full_load, refresh: wall time of successful reconciliations
    """

    def __init__(self, latency_window_size: int = LATENCY_WINDOW_SIZE) -> None:
        """
        Initialize metrics collector.

        Args:
            latency_window_size: Samples kept per latency window.
        """
        self._window_size = latency_window_size
        self._windows: dict[str, LatencyWindow] = {}
        self._counters: dict[str, int] = {}
        self._started = time.monotonic()
        self.last_load_ms: int | None = None
        self.last_refresh_outcome: RefreshOutcome | None = None

    def record_latency(self, name: str, latency_us: int) -> None:
        """Add a sample to the named latency window."""
        window = self._windows.get(name)
        if window is None:
            window = self._windows[name] = LatencyWindow(self._window_size)
        window.add(latency_us)

    def increment_counter(self, name: str, value: int = 1) -> None:
        self._counters[name] = self._counters.get(name, 0) + value

    def get_counter(self, name: str) -> int:
        return self._counters.get(name, 0)

    def record_load(self, success: bool, latency_us: int) -> None:
        """
        Record a full load (initial load or manual refetch).

        Args:
            success: Whether both feeds were fetched and reconciled.
            latency_us: Wall time of a successful load in microseconds.
        """
        if not success:
            self.increment_counter("load_failures")
            return

        self.increment_counter("full_loads")
        self.record_latency("full_load", latency_us)
        self.last_load_ms = get_timestamp_ms()

    def record_refresh(self, outcome: RefreshOutcome, latency_us: int = 0) -> None:
        """
        Record a periodic refresh tick.

        Args:
            outcome: What the tick did.
            latency_us: Wall time of an applied refresh in microseconds.
        """
        self.increment_counter(_REFRESH_COUNTERS[outcome])
        self.last_refresh_outcome = outcome
        if outcome is RefreshOutcome.APPLIED:
            self.record_latency("refresh", latency_us)

    def get_latency_stats(self, name: str) -> LatencyStats:
        window = self._windows.get(name)
        return window.stats() if window else LatencyStats()

    def get_all_latency_stats(self) -> dict[str, LatencyStats]:
        return {name: window.stats() for name, window in self._windows.items()}

    @property
    def uptime_seconds(self) -> float:
        """Seconds since the collector was created or reset."""
        return time.monotonic() - self._started

    def to_dict(self) -> dict[str, object]:
        """Export counters and latency summaries for the status API."""
        latencies = {}
        for name, stats in self.get_all_latency_stats().items():
            latencies[name] = {
                "count": stats.count,
                "avg_ms": round(stats.avg_us / 1000, 3),
                "p95_ms": round(stats.p95_us / 1000, 3),
                "max_ms": round(stats.max_us / 1000, 3),
            }

        last_outcome = self.last_refresh_outcome
        return {
            "uptime_seconds": round(self.uptime_seconds, 3),
            "last_load_ms": self.last_load_ms,
            "last_refresh_outcome": last_outcome.value if last_outcome else None,
            "counters": dict(self._counters),
            "latencies": latencies,
        }

    def reset(self) -> None:
        self._windows.clear()
        self._counters.clear()
        self._started = time.monotonic()
        self.last_load_ms = None
        self.last_refresh_outcome = None
