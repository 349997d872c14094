"""
Type definitions for the spread monitor.

This module contains the dataclasses, enums and Protocol definitions
shared by the reconciliation engine and its consumers. Records are
frozen so a published dataset can never be mutated in place.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from spreadwatch.exchange.models import PairIdentity, PriceSummary


# =============================================================================
# Enums
# =============================================================================


class RagStatus(str, Enum):
    """Red/amber/green risk tier of a pair."""

    GREEN = "green"
    AMBER = "amber"
    RED = "red"


class ControllerState(str, Enum):
    """Lifecycle state of the refresh controller."""

    IDLE = "IDLE"
    LOADING = "LOADING"
    READY = "READY"
    REFRESHING = "REFRESHING"
    FAILED = "FAILED"


class RefreshOutcome(str, Enum):
    """Result of a single periodic refresh tick."""

    APPLIED = "APPLIED"
    SKIPPED = "SKIPPED"
    FAILED = "FAILED"


# =============================================================================
# Market Data Types
# =============================================================================


@dataclass(slots=True, frozen=True)
class ReconciledRecord:
    """
    One pair after merging its identity with its price summary.

    Bid and ask are the raw feed strings; they are None when the
    summary feed had no entry for the pair.
    """

    ticker_id: str
    highest_bid: str | None
    lowest_ask: str | None
    spread_percentage: float | None
    rag_status: RagStatus

    @property
    def has_prices(self) -> bool:
        """Check whether a summary was matched for this pair."""
        return self.highest_bid is not None or self.lowest_ask is not None

    def to_dict(self) -> dict[str, Any]:
        """Export as a JSON-friendly dict."""
        return {
            "ticker_id": self.ticker_id,
            "highest_bid": self.highest_bid,
            "lowest_ask": self.lowest_ask,
            "spread_percentage": self.spread_percentage,
            "rag_status": self.rag_status.value,
        }


# =============================================================================
# Protocols
# =============================================================================


class MarketDataSource(Protocol):
    """Provider of the two feeds the controller reconciles."""

    async def fetch_pair_identities(self) -> list[PairIdentity]:
        """Fetch every tradable pair identity."""
        ...

    async def fetch_price_summaries(self) -> list[PriceSummary]:
        """Fetch the latest price summary for every pair."""
        ...
