"""
FastAPI server for the market dashboard.

Serves the reconciled market list with search and sort, and exposes
manual refetch and auto-refresh control.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Query, Request

from spreadwatch import __version__
from spreadwatch.config.settings import Settings, get_settings
from spreadwatch.core.controller import RefreshController
from spreadwatch.dashboard.view import SortDirection, SortOption, filter_and_sort, to_row
from spreadwatch.exchange.client import MarketDataClient, MarketDataError
from spreadwatch.telemetry.logger import setup_logging


logger = logging.getLogger(__name__)


def create_app(
    controller: RefreshController | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Create the dashboard application.

    Args:
        controller: Controller to serve. When omitted, one is built from
            settings around a MarketDataClient owned by the app.
        settings: Application settings (default: environment).

    Returns:
        Configured FastAPI app.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        client: MarketDataClient | None = None
        active = controller

        if active is None:
            cfg = settings or get_settings()
            client = MarketDataClient(cfg.api_base_url, timeout_s=cfg.request_timeout_s)
            active = RefreshController(client, refresh_interval_ms=cfg.refresh_interval_ms)

        app.state.controller = active

        try:
            await active.start()
        except MarketDataError as e:
            logger.error(f"Initial market data load failed: {e}")

        try:
            yield
        finally:
            await active.stop()
            if client:
                await client.close()

    app = FastAPI(title="Spreadwatch", version=__version__, lifespan=lifespan)
    app.get("/api/markets")(get_markets)
    app.get("/api/status")(get_status)
    app.post("/api/refetch")(refetch)
    app.post("/api/auto-refresh/stop")(stop_auto_refresh)
    return app


def _controller(request: Request) -> RefreshController:
    return request.app.state.controller  # type: ignore[no-any-return]


async def get_markets(
    request: Request,
    search: str = Query(default=""),
    sort: SortOption = Query(default=SortOption.NAME),
    direction: SortDirection = Query(default=SortDirection.ASC),
) -> dict[str, Any]:
    """List reconciled markets, filtered and sorted."""
    controller = _controller(request)
    records = filter_and_sort(
        controller.records,
        search_query=search,
        sort_option=sort,
        direction=direction,
    )

    return {
        "loading": controller.loading,
        "error": controller.error,
        "state": controller.state.value,
        "refresh_interval_ms": controller.refresh_interval_ms,
        "last_updated_ms": controller.last_updated_ms,
        "count": len(records),
        "markets": [to_row(r) for r in records],
    }


async def get_status(request: Request) -> dict[str, Any]:
    """Controller state and refresh metrics."""
    controller = _controller(request)
    return {
        "state": controller.state.value,
        "auto_refresh": controller.is_auto_refreshing,
        "pairs": len(controller.records),
        "metrics": controller.metrics.to_dict(),
    }


async def refetch(request: Request) -> dict[str, Any]:
    """Trigger a full reload of both feeds."""
    controller = _controller(request)
    try:
        records = await controller.refetch()
    except MarketDataError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    return {"status": "reloaded", "count": len(records)}


async def stop_auto_refresh(request: Request) -> dict[str, Any]:
    """Stop the periodic summary refresh."""
    controller = _controller(request)
    controller.stop_auto_refresh()
    return {"status": "stopped", "auto_refresh": controller.is_auto_refreshing}


def main() -> None:
    import uvicorn

    settings = get_settings()
    async_logger = setup_logging(level=settings.log_level, log_file=settings.log_file)

    print(
        f"""
╔═══════════════════════════════════════════════════════════════╗
║              SPREADWATCH - DASHBOARD                          ║
╚═══════════════════════════════════════════════════════════════╝

API: http://localhost:{settings.dashboard_port}/api/markets
Press Ctrl+C to stop.
    """
    )

    try:
        uvicorn.run(
            create_app(settings=settings),
            host=settings.dashboard_host,
            port=settings.dashboard_port,
            log_level=settings.log_level.lower(),
        )
    finally:
        async_logger.stop()


if __name__ == "__main__":
    main()
