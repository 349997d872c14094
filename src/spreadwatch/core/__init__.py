"""Core module containing the refresh controller and type definitions."""

from spreadwatch.core.types import (
    ControllerState,
    MarketDataSource,
    RagStatus,
    ReconciledRecord,
    RefreshOutcome,
)


__all__ = [
    "ControllerState",
    "MarketDataSource",
    "RagStatus",
    "ReconciledRecord",
    "RefreshOutcome",
]
