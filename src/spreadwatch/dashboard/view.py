"""
Market list view helpers.

Search, sort and display formatting for reconciled records, shared by
the terminal monitor and the dashboard API.
"""

from collections.abc import Iterable
from enum import Enum
from typing import Any

from spreadwatch.config.constants import (
    MISSING_VALUE,
    PRICE_PRECISION,
    RAG_COLORS,
    RAG_UNKNOWN_COLOR,
    SMALL_PRICE_PRECISION,
    SPREAD_PRECISION,
)
from spreadwatch.core.types import RagStatus, ReconciledRecord
from spreadwatch.market.symbols import to_display_pair
from spreadwatch.utils.math import parse_price


class SortOption(str, Enum):
    """Column the market list is sorted by."""

    NAME = "name"
    SPREAD = "spread"


class SortDirection(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


# =============================================================================
# Search & Sort
# =============================================================================


def filter_and_sort(
    records: Iterable[ReconciledRecord],
    search_query: str = "",
    sort_option: SortOption = SortOption.NAME,
    direction: SortDirection = SortDirection.ASC,
) -> list[ReconciledRecord]:
    """
    Filter records by ticker and sort them.

    Args:
        records: Reconciled records; never modified.
        search_query: Case-insensitive ticker substring. Blank keeps all.
        sort_option: Sort by ticker name or spread.
        direction: Ascending or descending.

    Returns:
        New list of matching records. Records without a spread go last
        when ascending and first when descending; ties keep input order.
    """
    query = search_query.strip().lower()
    matched = [r for r in records if not query or query in r.ticker_id.lower()]
    descending = direction is SortDirection.DESC

    if sort_option is SortOption.NAME:
        return sorted(matched, key=lambda r: r.ticker_id.lower(), reverse=descending)

    priced = [r for r in matched if r.spread_percentage is not None]
    unpriced = [r for r in matched if r.spread_percentage is None]
    priced.sort(key=lambda r: r.spread_percentage, reverse=descending)  # type: ignore[arg-type, return-value]

    return unpriced + priced if descending else priced + unpriced


def next_sort(
    current_option: SortOption,
    current_direction: SortDirection,
    selected: SortOption,
) -> tuple[SortOption, SortDirection]:
    """
    Resolve the sort state after a column is selected.

    Selecting the active column flips the direction; selecting another
    column sorts it ascending.
    """
    if selected is current_option:
        flipped = SortDirection.DESC if current_direction is SortDirection.ASC else SortDirection.ASC
        return selected, flipped
    return selected, SortDirection.ASC


# =============================================================================
# Formatting
# =============================================================================


def format_price(price: str | None) -> str:
    """
    Format a raw price for display.

    Example:
        >>> format_price("99500")
        '99500.00'
        >>> format_price("0.00012345")
        '0.000123'
        >>> format_price(None)
        '-'
    """
    value = parse_price(price)
    if value is None:
        return MISSING_VALUE

    precision = SMALL_PRICE_PRECISION if value < 1 else PRICE_PRECISION
    return f"{value:.{precision}f}"


def format_spread(spread: float | None) -> str:
    """Format a spread percentage ("0.10%"), or "-" when missing."""
    if spread is None:
        return MISSING_VALUE
    return f"{spread:.{SPREAD_PRECISION}f}%"


def rag_color(status: RagStatus | str) -> str:
    """Get the hex color for a RAG status."""
    key = status.value if isinstance(status, RagStatus) else status
    return RAG_COLORS.get(key, RAG_UNKNOWN_COLOR)


def to_row(record: ReconciledRecord) -> dict[str, Any]:
    """Build the display row for a record."""
    return {
        **record.to_dict(),
        "pair": to_display_pair(record.ticker_id),
        "bid": format_price(record.highest_bid),
        "ask": format_price(record.lowest_ask),
        "spread": format_spread(record.spread_percentage),
        "rag_color": rag_color(record.rag_status),
    }
