"""
Numeric helpers for price fields.

Market feeds encode decimals as strings; parse_price turns them into
floats without ever raising on malformed input.
"""

import math
import re


# Plain ASCII decimal: optional sign, digits with an optional fraction, optional exponent
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_price(value: str | None) -> float | None:
    """
    Parse a decimal price string.

    Args:
        value: Raw price field from the feed.

    Returns:
        The parsed finite float, or None if the value is missing, empty,
        malformed, NaN or infinite. Underscore separators and non-ASCII
        digits count as malformed.

    Example:
        >>> parse_price("99500.5")
        99500.5
        >>> parse_price("n/a") is None
        True
    """
    if value is None:
        return None

    text = value.strip()
    if not _DECIMAL_RE.fullmatch(text):
        return None

    try:
        number = float(text)
    except ValueError:
        return None

    if not math.isfinite(number):
        return None
    return number
