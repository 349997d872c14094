"""
Refresh controller.

Owns the reconciled dataset and its lifecycle:
- Full load: fetch identities and summaries together, reconcile
- Periodic refresh: fetch summaries only, reconcile against the
  identities rebuilt from the current dataset
- Fault isolation: a failed refresh keeps the last good dataset and
  stops the timer; a failed load is surfaced to the caller

Every reconciliation runs under one lock, and the published dataset is
swapped as a whole tuple, so readers only ever see complete results.
"""

import asyncio
import contextlib
import logging

from spreadwatch.config.constants import DEFAULT_REFRESH_INTERVAL_MS
from spreadwatch.core.types import (
    ControllerState,
    MarketDataSource,
    ReconciledRecord,
    RefreshOutcome,
)
from spreadwatch.exchange.client import MarketDataError
from spreadwatch.market.reconciler import reconcile
from spreadwatch.market.symbols import identity_from_ticker
from spreadwatch.telemetry.metrics import MetricsCollector
from spreadwatch.utils.time import LatencyTimer, get_timestamp_ms


logger = logging.getLogger(__name__)


class RefreshController:
    """
    Keeps a reconciled market dataset fresh.

    State machine:
        IDLE -> LOADING -> READY | FAILED
        READY -> REFRESHING -> READY   (also on refresh failure)

    Usage:
        async with RefreshController(client, refresh_interval_ms=60_000) as controller:
            ...
            controller.records
    """

    def __init__(
        self,
        source: MarketDataSource,
        refresh_interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS,
        metrics: MetricsCollector | None = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            source: Provider of the identity and summary feeds.
            refresh_interval_ms: Delay between summaries-only refreshes.
            metrics: Optional metrics collector.
        """
        if refresh_interval_ms <= 0:
            raise ValueError("refresh_interval_ms must be positive")

        self._source = source
        self._refresh_interval_ms = refresh_interval_ms
        self._metrics = metrics or MetricsCollector()

        self._records: tuple[ReconciledRecord, ...] = ()
        self._state = ControllerState.IDLE
        self._error: str | None = None
        self._last_updated_ms: int | None = None

        self._lock = asyncio.Lock()
        self._timer_task: asyncio.Task[None] | None = None
        self._halted_by_failure = False

    # =========================================================================
    # Public State
    # =========================================================================

    @property
    def records(self) -> tuple[ReconciledRecord, ...]:
        """Current reconciled dataset."""
        return self._records

    @property
    def state(self) -> ControllerState:
        """Current lifecycle state."""
        return self._state

    @property
    def loading(self) -> bool:
        """Whether a full load is in flight."""
        return self._state is ControllerState.LOADING

    @property
    def error(self) -> str | None:
        """Message of the last failed load, cleared when a new load starts."""
        return self._error

    @property
    def refresh_interval_ms(self) -> int:
        """Delay between periodic refreshes in milliseconds."""
        return self._refresh_interval_ms

    @property
    def last_updated_ms(self) -> int | None:
        """Time of the last successful reconciliation."""
        return self._last_updated_ms

    @property
    def is_auto_refreshing(self) -> bool:
        """Whether the periodic refresh timer is running."""
        return self._timer_task is not None and not self._timer_task.done()

    @property
    def metrics(self) -> MetricsCollector:
        """Get metrics collector."""
        return self._metrics

    # =========================================================================
    # Full Load
    # =========================================================================

    async def load(self) -> tuple[ReconciledRecord, ...]:
        """
        Fetch both feeds and replace the dataset.

        Queues behind any reconciliation already in flight.

        Returns:
            The new dataset.

        Raises:
            MarketDataError: If either feed fails. The controller moves to
                FAILED and keeps its previous records.
            asyncio.CancelledError: If the load is cancelled. State and
                error revert to what they were before the load started.
        """
        async with self._lock:
            previous_state, previous_error = self._state, self._error
            self._state = ControllerState.LOADING
            self._error = None

            with LatencyTimer() as timer:
                try:
                    identities, summaries = await asyncio.gather(
                        self._source.fetch_pair_identities(),
                        self._source.fetch_price_summaries(),
                    )
                except asyncio.CancelledError:
                    # LOADING and REFRESHING only exist while the lock is held
                    self._state, self._error = previous_state, previous_error
                    logger.warning(f"Market data load cancelled, state {self._state.value}")
                    raise
                except MarketDataError as e:
                    self._state = ControllerState.FAILED
                    self._error = str(e)
                    self._metrics.record_load(success=False, latency_us=0)
                    logger.error(f"Market data load failed: {e}")
                    raise

                records = reconcile(identities, summaries)
                self._publish(records)

            self._state = ControllerState.READY
            self._metrics.record_load(success=True, latency_us=timer.latency_us)
            logger.info(
                f"Loaded {len(records)} pairs from {len(summaries)} summaries "
                f"in {timer.latency_us / 1000:.1f}ms"
            )

        if self._halted_by_failure:
            logger.info("Resuming auto-refresh after successful reload")
            self._halted_by_failure = False
            self.start_auto_refresh()

        return self._records

    async def refetch(self) -> tuple[ReconciledRecord, ...]:
        """Manually trigger a full reload."""
        return await self.load()

    # =========================================================================
    # Periodic Refresh
    # =========================================================================

    async def refresh(self) -> RefreshOutcome:
        """
        Re-reconcile the current pairs against fresh summaries.

        Skipped unless the controller is READY and no other
        reconciliation is in flight. Failures are logged and leave the
        dataset untouched.

        Returns:
            What this refresh did.
        """
        if self._lock.locked() or self._state is not ControllerState.READY:
            logger.debug(f"Refresh skipped in state {self._state.value}")
            self._metrics.record_refresh(RefreshOutcome.SKIPPED)
            return RefreshOutcome.SKIPPED

        async with self._lock:
            self._state = ControllerState.REFRESHING

            try:
                with LatencyTimer() as timer:
                    summaries = await self._source.fetch_price_summaries()
                    identities = [identity_from_ticker(r.ticker_id) for r in self._records]
                    records = reconcile(identities, summaries)
                    self._publish(records)
            except MarketDataError as e:
                logger.warning(f"Auto-refresh failed: {e}")
                self._metrics.record_refresh(RefreshOutcome.FAILED)
                return RefreshOutcome.FAILED
            finally:
                self._state = ControllerState.READY

        self._metrics.record_refresh(RefreshOutcome.APPLIED, timer.latency_us)
        logger.debug(f"Refreshed {len(records)} pairs in {timer.latency_us / 1000:.1f}ms")
        return RefreshOutcome.APPLIED

    async def _auto_refresh_loop(self) -> None:
        """Refresh on a fixed interval until stopped or a refresh fails."""
        interval_s = self._refresh_interval_ms / 1000

        while True:
            await asyncio.sleep(interval_s)

            outcome = await self.refresh()
            if outcome is RefreshOutcome.FAILED:
                self._halted_by_failure = True
                logger.warning("Auto-refresh stopped after a failed refresh")
                return

    def start_auto_refresh(self) -> None:
        """Start the periodic refresh timer if it is not already running."""
        if self.is_auto_refreshing:
            return

        self._halted_by_failure = False
        self._timer_task = asyncio.create_task(self._auto_refresh_loop())
        logger.debug(f"Auto-refresh started every {self._refresh_interval_ms}ms")

    def stop_auto_refresh(self) -> None:
        """Cancel the periodic refresh timer."""
        self._halted_by_failure = False
        if self._timer_task is not None:
            if not self._timer_task.done():
                self._timer_task.cancel()
            self._timer_task = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> None:
        """
        Start the refresh timer and perform the initial load.

        Raises:
            MarketDataError: If the initial load fails. The timer keeps
                running and resumes refreshing once a refetch succeeds.
        """
        self.start_auto_refresh()
        await self.load()

    async def stop(self) -> None:
        """Stop the refresh timer and wait for it to finish."""
        task = self._timer_task
        self.stop_auto_refresh()

        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def _publish(self, records: list[ReconciledRecord]) -> None:
        """Atomically replace the dataset."""
        self._records = tuple(records)
        self._last_updated_ms = get_timestamp_ms()

    async def __aenter__(self) -> "RefreshController":
        """Async context manager entry: start and load."""
        try:
            await self.start()
        except BaseException:
            await self.stop()
            raise
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit: release the timer."""
        await self.stop()
