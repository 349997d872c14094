"""
Unit tests for the CLI reporter.
"""

import io

import pytest

from spreadwatch.core.controller import RefreshController
from spreadwatch.dashboard.view import SortOption
from spreadwatch.exchange.client import MarketDataError
from spreadwatch.telemetry.reporter import CLIReporter
from tests.mocks.exchange import MockMarketDataSource


class TestCLIReporter:
    """Tests for CLIReporter rendering."""

    def test_render_before_load(self, mock_source: MockMarketDataSource) -> None:
        """Test the panel of an idle controller."""
        controller = RefreshController(mock_source)
        reporter = CLIReporter(controller, output=io.StringIO())

        panel = reporter.render()

        assert "IDLE" in panel
        assert "Pairs: 0" in panel
        assert "Updated: never" in panel
        assert "Auto: OFF" in panel

    async def test_render_rows(self, controller: RefreshController) -> None:
        """Test market rows and RAG counts after a load."""
        await controller.load()
        reporter = CLIReporter(controller, output=io.StringIO())

        panel = reporter.render()

        assert "READY" in panel
        assert "Green: 2  Amber: 0  Red: 1" in panel
        assert "BTC/USD" in panel
        assert "99500.00" in panel
        assert "0.10%" in panel
        lines = panel.splitlines()
        assert all(len(line) == 80 for line in lines)

    async def test_render_truncates(self, controller: RefreshController) -> None:
        """Test rows beyond max_rows are summarized."""
        await controller.load()
        reporter = CLIReporter(controller, max_rows=1, output=io.StringIO())

        panel = reporter.render()

        assert "BTC/USD" in panel
        assert "ETH/USD" not in panel
        assert "... 2 more" in panel

    async def test_render_search_and_sort(self, controller: RefreshController) -> None:
        """Test the panel applies its search and sort."""
        await controller.load()
        reporter = CLIReporter(
            controller,
            output=io.StringIO(),
            sort_option=SortOption.SPREAD,
            search_query="usd",
        )

        panel = reporter.render()

        assert panel.index("ETH/USD") < panel.index("LTC/USD")

    async def test_render_error(
        self,
        controller: RefreshController,
        mock_source: MockMarketDataSource,
    ) -> None:
        """Test a failed load shows its message."""
        mock_source.fail_identities(503)

        with pytest.raises(MarketDataError):
            await controller.load()

        panel = CLIReporter(controller, output=io.StringIO()).render()

        assert "FAILED" in panel
        assert "Error: HTTP error! status: 503" in panel

    async def test_print_summary(self, controller: RefreshController) -> None:
        """Test the session summary goes to the output stream."""
        await controller.load()
        output = io.StringIO()

        CLIReporter(controller, output=output).print_summary()

        text = output.getvalue()
        assert "SESSION SUMMARY" in text
        assert "Pairs tracked: 3" in text
        assert "Full loads:       1" in text
