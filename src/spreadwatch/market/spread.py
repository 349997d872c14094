"""
Bid/ask spread calculation.

Spread is expressed as a percentage of the mid price:

    spread_pct = (ask - bid) / ((ask + bid) / 2) * 100
"""

from spreadwatch.utils.math import parse_price


def calculate_spread(ask: str | None, bid: str | None) -> float | None:
    """
    Calculate the spread percentage from raw ask and bid fields.

    Args:
        ask: Lowest ask as a decimal string.
        bid: Highest bid as a decimal string.

    Returns:
        Spread as a percentage of mid price, floored at 0 for crossed
        books. None if either price is missing, malformed or not positive.

    Example:
        >>> round(calculate_spread("110", "100"), 2)
        9.52
        >>> calculate_spread("100", "") is None
        True
    """
    ask_price = parse_price(ask)
    bid_price = parse_price(bid)

    if ask_price is None or bid_price is None:
        return None
    if ask_price <= 0 or bid_price <= 0:
        return None

    spread = ask_price - bid_price
    mid = 0.5 * ask_price + 0.5 * bid_price

    return max(0.0, (spread / mid) * 100)
