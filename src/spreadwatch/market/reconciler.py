"""
Identity/summary reconciliation.

Merges the static pair identities with the volatile price summaries
into exactly one ReconciledRecord per identity, in identity order.
"""

from collections.abc import Iterable, Sequence

from spreadwatch.core.types import RagStatus, ReconciledRecord
from spreadwatch.exchange.models import PairIdentity, PriceSummary
from spreadwatch.market.risk import classify
from spreadwatch.market.spread import calculate_spread
from spreadwatch.market.symbols import to_summary_key


def index_summaries(summaries: Iterable[PriceSummary]) -> dict[str, PriceSummary]:
    """
    Index summaries by their pair key.

    Later entries replace earlier ones with the same key.
    """
    return {summary.trading_pairs: summary for summary in summaries}


def build_record(ticker_id: str, summary: PriceSummary | None) -> ReconciledRecord:
    """
    Build the record for one pair.

    Args:
        ticker_id: Identity ticker id.
        summary: Matching summary, or None if the feed had none.

    Returns:
        ReconciledRecord with derived spread and RAG status.
    """
    if summary is None:
        return ReconciledRecord(
            ticker_id=ticker_id,
            highest_bid=None,
            lowest_ask=None,
            spread_percentage=None,
            rag_status=RagStatus.RED,
        )

    spread = calculate_spread(summary.lowest_ask, summary.highest_bid)

    return ReconciledRecord(
        ticker_id=ticker_id,
        highest_bid=summary.highest_bid,
        lowest_ask=summary.lowest_ask,
        spread_percentage=spread,
        rag_status=classify(spread),
    )


def reconcile(
    identities: Sequence[PairIdentity],
    summaries: Iterable[PriceSummary],
) -> list[ReconciledRecord]:
    """
    Merge identities with summaries.

    Args:
        identities: Pair identities; defines output order and length.
        summaries: Price summaries keyed by hyphenated pair name.

    Returns:
        One record per identity, in input order.
    """
    if not identities:
        return []

    by_pair = index_summaries(summaries)

    return [
        build_record(identity.ticker_id, by_pair.get(to_summary_key(identity.ticker_id)))
        for identity in identities
    ]
