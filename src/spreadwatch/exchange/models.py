"""
Pydantic models for market data API responses.

These models provide type-safe parsing of the identity and summary
feeds with automatic validation.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _coerce_decimal_text(value: Any) -> str | None:
    """
    Keep decimal fields as text even when the feed sends JSON numbers.

    Anything that is neither text nor a number (booleans, objects,
    arrays) degrades to None so one bad entry cannot reject the feed.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    return None


class PairIdentity(BaseModel):
    """Tradable pair from the identity feed."""

    ticker_id: str
    base: str
    target: str
    pool_id: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class PriceSummary(BaseModel):
    """Market snapshot for one pair from the summary feed."""

    trading_pairs: str
    highest_bid: str | None = None
    lowest_ask: str | None = None
    last_price: str | None = None
    lowest_price_24h: str | None = None
    highest_price_24h: str | None = None
    base_volume: str | None = None
    quote_volume: str | None = None
    price_change_percent_24h: str | None = None

    model_config = ConfigDict(frozen=True, extra="ignore")

    @field_validator(
        "highest_bid",
        "lowest_ask",
        "last_price",
        "lowest_price_24h",
        "highest_price_24h",
        "base_volume",
        "quote_volume",
        "price_change_percent_24h",
        mode="before",
    )
    @classmethod
    def coerce_numbers(cls, v: Any) -> Any:
        """Accept numeric JSON values for decimal string fields."""
        return _coerce_decimal_text(v)


class SummaryResponse(BaseModel):
    """Envelope of the summary endpoint."""

    timestamp: str | int | None = None
    summary: list[PriceSummary] | None = Field(default=None)

    model_config = ConfigDict(extra="ignore")

    @property
    def summaries(self) -> list[PriceSummary]:
        """Summaries, treating a null or missing list as empty."""
        return list(self.summary or [])
