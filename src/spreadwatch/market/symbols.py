"""
Ticker naming and normalization.

The identity feed names pairs ``BASE_TARGET`` while the summary feed
uses ``BASE-TARGET``. Every conversion between the two conventions goes
through this module.
"""

import logging

from spreadwatch.config.constants import (
    DISPLAY_PAIR_SEPARATOR,
    SUMMARY_PAIR_SEPARATOR,
    TICKER_SEPARATOR,
)
from spreadwatch.exchange.models import PairIdentity


logger = logging.getLogger(__name__)


def to_summary_key(ticker_id: str) -> str:
    """
    Convert an identity ticker id to the summary feed's pair key.

    Args:
        ticker_id: Identity ticker (e.g., "BTC_USD").

    Returns:
        Summary key (e.g., "BTC-USD").
    """
    return ticker_id.replace(TICKER_SEPARATOR, SUMMARY_PAIR_SEPARATOR)


def split_ticker_id(ticker_id: str) -> tuple[str, str]:
    """
    Split a ticker id into base and target.

    Splits on the first separator only: the base is the leading segment
    and the target keeps everything after it, so ``"A_B_C"`` becomes
    ``("A", "B_C")``. A ticker without a separator yields an empty target.

    Args:
        ticker_id: Identity ticker (e.g., "BTC_USD").

    Returns:
        Tuple of (base, target).
    """
    base, sep, target = ticker_id.partition(TICKER_SEPARATOR)
    if not sep:
        logger.debug(f"Ticker {ticker_id!r} has no {TICKER_SEPARATOR!r} separator")
    return base, target


def identity_from_ticker(ticker_id: str) -> PairIdentity:
    """
    Rebuild a pair identity from its ticker id.

    The ticker id is kept verbatim, so the rebuilt identity matches the
    same summary as the feed identity even when the base/target split is
    ambiguous.
    """
    base, target = split_ticker_id(ticker_id)
    return PairIdentity(ticker_id=ticker_id, base=base, target=target)


def to_display_pair(ticker_id: str) -> str:
    """Format a ticker for display ("BTC_USD" -> "BTC/USD")."""
    return ticker_id.replace(TICKER_SEPARATOR, DISPLAY_PAIR_SEPARATOR, 1)
