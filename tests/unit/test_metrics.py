"""
Unit tests for MetricsCollector.
"""

from spreadwatch.core.types import RefreshOutcome
from spreadwatch.telemetry.metrics import LatencyStats, MetricsCollector


class TestMetricsCollector:
    """Tests for MetricsCollector."""

    def test_empty_stats(self) -> None:
        """Test stats for an unknown metric."""
        metrics = MetricsCollector()

        assert metrics.get_latency_stats("refresh") == LatencyStats()
        assert metrics.get_counter("refreshes") == 0

    def test_latency_stats(self) -> None:
        """Test aggregation over recorded samples."""
        metrics = MetricsCollector()
        for latency in (100, 200, 300, 400):
            metrics.record_latency("refresh", latency)

        stats = metrics.get_latency_stats("refresh")

        assert stats.count == 4
        assert stats.min_us == 100
        assert stats.max_us == 400
        assert stats.avg_us == 250.0

    def test_latency_window(self) -> None:
        """Test old samples fall out of the window."""
        metrics = MetricsCollector(latency_window_size=2)
        for latency in (1, 2, 3):
            metrics.record_latency("full_load", latency)

        stats = metrics.get_latency_stats("full_load")

        assert stats.count == 2
        assert stats.min_us == 2

    def test_record_load(self) -> None:
        """Test load success and failure counters."""
        metrics = MetricsCollector()

        metrics.record_load(success=True, latency_us=1500)
        metrics.record_load(success=False, latency_us=0)

        assert metrics.get_counter("full_loads") == 1
        assert metrics.get_counter("load_failures") == 1
        assert metrics.get_latency_stats("full_load").count == 1

    def test_record_refresh(self) -> None:
        """Test one counter per refresh outcome."""
        metrics = MetricsCollector()

        metrics.record_refresh(RefreshOutcome.APPLIED, 800)
        metrics.record_refresh(RefreshOutcome.FAILED)
        metrics.record_refresh(RefreshOutcome.SKIPPED)
        metrics.record_refresh(RefreshOutcome.SKIPPED)

        assert metrics.get_counter("refreshes") == 1
        assert metrics.get_counter("refresh_failures") == 1
        assert metrics.get_counter("refreshes_skipped") == 2
        assert metrics.get_latency_stats("refresh").max_us == 800

    def test_to_dict(self) -> None:
        """Test export shape."""
        metrics = MetricsCollector()
        metrics.record_load(success=True, latency_us=1000)

        data = metrics.to_dict()

        assert data["counters"] == {"full_loads": 1}
        assert "full_load" in data["latencies"]  # type: ignore[operator]
        assert data["uptime_seconds"] >= 0  # type: ignore[operator]

    def test_reset(self) -> None:
        """Test reset clears everything."""
        metrics = MetricsCollector()
        metrics.record_refresh(RefreshOutcome.APPLIED, 10)

        metrics.reset()

        assert metrics.get_counter("refreshes") == 0
        assert metrics.get_all_latency_stats() == {}
