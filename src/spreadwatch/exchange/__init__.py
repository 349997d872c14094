"""Market data API integration."""

from spreadwatch.exchange.client import (
    HttpError,
    MarketDataClient,
    MarketDataError,
    NetworkError,
    ResponseFormatError,
)
from spreadwatch.exchange.models import PairIdentity, PriceSummary, SummaryResponse


__all__ = [
    "HttpError",
    "MarketDataClient",
    "MarketDataError",
    "NetworkError",
    "PairIdentity",
    "PriceSummary",
    "ResponseFormatError",
    "SummaryResponse",
]
