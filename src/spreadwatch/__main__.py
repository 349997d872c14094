"""
Entry point for the terminal market monitor.

Usage:
    python -m spreadwatch
    spreadwatch  # if installed via pip

Send SIGHUP to the running monitor to reload both feeds, e.g. after a
failed initial load:
    kill -HUP <pid>
"""

import asyncio
import logging
import os
import signal
import sys
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from spreadwatch.core.controller import RefreshController


# Try to use uvloop for better performance
try:
    import uvloop

    UVLOOP_AVAILABLE = True
except ImportError:
    UVLOOP_AVAILABLE = False


# Named explicitly: under `python -m` __name__ is "__main__", outside the
# hierarchy the queue logger captures
logger = logging.getLogger("spreadwatch.monitor")


async def reload_market_data(controller: "RefreshController") -> bool:
    """
    Run a manual full reload for the monitor.

    A failure is already surfaced through the controller's error and the
    panel, so it is logged here rather than raised.

    Returns:
        True if the reload published a new dataset.
    """
    from spreadwatch.exchange.client import MarketDataError

    try:
        records = await controller.refetch()
    except MarketDataError as e:
        logger.warning(f"Manual reload failed: {e}")
        return False

    logger.info(f"Manual reload published {len(records)} pairs")
    return True


def request_reload(
    controller: "RefreshController", pending: set[asyncio.Task[bool]]
) -> asyncio.Task[bool]:
    """Schedule a reload from a signal handler, keeping a reference until it ends."""
    task = asyncio.create_task(reload_market_data(controller))
    pending.add(task)
    task.add_done_callback(pending.discard)
    return task


async def run_monitor() -> int:
    """
    Run the monitor until SIGINT/SIGTERM.

    SIGHUP triggers a full reload of both feeds.

    Returns:
        Exit code (0 for success).
    """
    from spreadwatch.config.settings import get_settings
    from spreadwatch.core.controller import RefreshController
    from spreadwatch.exchange.client import MarketDataClient, MarketDataError
    from spreadwatch.telemetry.logger import setup_logging
    from spreadwatch.telemetry.reporter import CLIReporter

    settings = get_settings()
    async_logger = setup_logging(level=settings.log_level, log_file=settings.log_file)

    client = MarketDataClient(settings.api_base_url, timeout_s=settings.request_timeout_s)
    controller = RefreshController(client, refresh_interval_ms=settings.refresh_interval_ms)
    reporter = CLIReporter(controller, max_rows=settings.max_rows)
    reloads: set[asyncio.Task[bool]] = set()

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, shutdown_event.set)
    if hasattr(signal, "SIGHUP"):
        loop.add_signal_handler(signal.SIGHUP, request_reload, controller, reloads)

    try:
        try:
            await controller.start()
        except MarketDataError:
            # Shown in the panel; ticks apply again once a SIGHUP reload succeeds
            pass

        reporter.start(interval=settings.report_interval_s)
        await shutdown_event.wait()
        return 0

    finally:
        for task in list(reloads):
            task.cancel()
        await asyncio.gather(*reloads, return_exceptions=True)
        reporter.stop()
        await controller.stop()
        await client.close()
        reporter.print_summary()
        async_logger.stop()


def main() -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success).
    """
    from spreadwatch import __version__
    from spreadwatch.config.settings import get_settings

    print(
        f"""
╔═══════════════════════════════════════════════════════════════╗
║     SPREADWATCH v{__version__:<39}      ║
║                                                               ║
║     Live bid/ask spread and RAG monitor                       ║
╚═══════════════════════════════════════════════════════════════╝
    """
    )

    try:
        settings = get_settings()
    except Exception as e:
        print(f"Configuration error: {e}")
        print("\nMake sure you have a .env file with:")
        print("  API_BASE_URL=https://your-market-data-host")
        return 1

    print("Configuration:")
    print(f"  API:            {settings.api_base_url}")
    print(f"  Refresh every:  {settings.refresh_interval_s:g}s")
    print(f"  Timeout:        {settings.request_timeout_s:g}s")
    print(f"  uvloop:         {'Enabled' if UVLOOP_AVAILABLE and settings.use_uvloop else 'Disabled'}")
    if hasattr(signal, "SIGHUP"):
        print(f"  Reload:         kill -HUP {os.getpid()}")
    print()

    if UVLOOP_AVAILABLE and settings.use_uvloop:
        return uvloop.run(run_monitor())
    return asyncio.run(run_monitor())


if __name__ == "__main__":
    sys.exit(main())
