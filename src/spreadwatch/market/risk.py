"""RAG classification of spreads."""

from spreadwatch.config.constants import GREEN_SPREAD_THRESHOLD_PCT
from spreadwatch.core.types import RagStatus


def classify(spread_percentage: float | None) -> RagStatus:
    """
    Map a spread percentage to a RAG status.

    Red is reserved for missing price data. Any present spread is green
    up to and including the threshold and amber above it, however wide.

    Args:
        spread_percentage: Spread in percent, or None without prices.

    Returns:
        The pair's RagStatus.
    """
    if spread_percentage is None:
        return RagStatus.RED
    if spread_percentage <= GREEN_SPREAD_THRESHOLD_PCT:
        return RagStatus.GREEN
    return RagStatus.AMBER
