"""Market data reconciliation: normalization, spread, risk and merge."""

from spreadwatch.market.reconciler import build_record, index_summaries, reconcile
from spreadwatch.market.risk import classify
from spreadwatch.market.spread import calculate_spread
from spreadwatch.market.symbols import (
    identity_from_ticker,
    split_ticker_id,
    to_display_pair,
    to_summary_key,
)


__all__ = [
    "build_record",
    "calculate_spread",
    "classify",
    "identity_from_ticker",
    "index_summaries",
    "reconcile",
    "split_ticker_id",
    "to_display_pair",
    "to_summary_key",
]
