"""Test doubles for the market data feeds."""

from tests.mocks.exchange import MockMarketDataSource


__all__ = ["MockMarketDataSource"]
