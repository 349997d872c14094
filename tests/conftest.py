"""
Pytest configuration and shared fixtures.

Provides reusable test fixtures for all test modules.
"""

from collections.abc import AsyncIterator

import pytest

from spreadwatch.core.controller import RefreshController
from spreadwatch.exchange.models import PairIdentity, PriceSummary
from tests.mocks.exchange import MockMarketDataSource


# =============================================================================
# Pair Fixtures
# =============================================================================


@pytest.fixture
def identity_btc_usd() -> PairIdentity:
    """BTC/USD pair identity."""
    return PairIdentity(ticker_id="BTC_USD", base="BTC", target="USD")


@pytest.fixture
def identity_eth_usd() -> PairIdentity:
    """ETH/USD pair identity."""
    return PairIdentity(ticker_id="ETH_USD", base="ETH", target="USD")


@pytest.fixture
def identity_ltc_usd() -> PairIdentity:
    """LTC/USD pair identity (no summary in the default feed)."""
    return PairIdentity(ticker_id="LTC_USD", base="LTC", target="USD")


@pytest.fixture
def identities(
    identity_btc_usd: PairIdentity,
    identity_eth_usd: PairIdentity,
    identity_ltc_usd: PairIdentity,
) -> list[PairIdentity]:
    """Identity feed in server order."""
    return [identity_btc_usd, identity_eth_usd, identity_ltc_usd]


# =============================================================================
# Summary Fixtures
# =============================================================================


@pytest.fixture
def summary_btc_usd() -> PriceSummary:
    """BTC-USD summary with a tight spread."""
    return PriceSummary(trading_pairs="BTC-USD", highest_bid="99500", lowest_ask="99600")


@pytest.fixture
def summary_eth_usd() -> PriceSummary:
    """ETH-USD summary with a tight spread."""
    return PriceSummary(trading_pairs="ETH-USD", highest_bid="3150", lowest_ask="3160")


@pytest.fixture
def summaries(
    summary_btc_usd: PriceSummary,
    summary_eth_usd: PriceSummary,
) -> list[PriceSummary]:
    """Summary feed covering BTC and ETH only."""
    return [summary_btc_usd, summary_eth_usd]


# =============================================================================
# Source / Controller Fixtures
# =============================================================================


@pytest.fixture
def mock_source(
    identities: list[PairIdentity],
    summaries: list[PriceSummary],
) -> MockMarketDataSource:
    """Mock source serving the default feeds."""
    return MockMarketDataSource(identities=identities, summaries=summaries)


@pytest.fixture
async def controller(mock_source: MockMarketDataSource) -> AsyncIterator[RefreshController]:
    """Controller over the mock source with a long refresh interval."""
    ctrl = RefreshController(mock_source, refresh_interval_ms=60_000)
    yield ctrl
    await ctrl.stop()
