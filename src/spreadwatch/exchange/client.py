"""
Async market data REST client.

Fetches the two feeds the spread monitor reconciles:
- Pair identities (GET /market/pairs)
- Price summaries (GET /market/summary)

Responses are parsed with orjson and validated with pydantic.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aiohttp
import orjson
from pydantic import TypeAdapter, ValidationError

from spreadwatch.config.constants import (
    DEFAULT_REQUEST_TIMEOUT,
    ENDPOINT_MARKET_PAIRS,
    ENDPOINT_MARKET_SUMMARY,
)
from spreadwatch.exchange.models import PairIdentity, PriceSummary, SummaryResponse


logger = logging.getLogger(__name__)

_PAIR_LIST = TypeAdapter(list[PairIdentity])


class MarketDataError(Exception):
    """Base exception for market data client errors."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class HttpError(MarketDataError):
    """Non-2xx response from the market data API."""

    def __init__(self, status: int) -> None:
        super().__init__(f"HTTP error! status: {status}", status=status)


class NetworkError(MarketDataError):
    """Transport failure (connection, DNS, timeout)."""

    pass


class ResponseFormatError(MarketDataError):
    """Response body is not valid JSON or does not match the expected shape."""

    pass


class MarketDataClient:
    """
    Async client for the market data API.

    Features:
    - Single session with connection pooling
    - orjson for fast JSON parsing
    - Per-request total timeout
    - Typed errors for HTTP and transport failures
    """

    def __init__(
        self,
        base_url: str,
        timeout_s: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: API base URL without trailing slash.
            timeout_s: Total timeout for each request in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_s)
        self._session: aiohttp.ClientSession | None = None

    @property
    def base_url(self) -> str:
        """API base URL."""
        return self._base_url

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            connector = aiohttp.TCPConnector(
                limit=10,
                keepalive_timeout=30,
                enable_cleanup_closed=True,
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=self._timeout,
                headers={"Accept": "application/json"},
            )

        return self._session

    async def close(self) -> None:
        """Close the client session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    @asynccontextmanager
    async def _request_context(self) -> AsyncIterator[aiohttp.ClientSession]:
        """Context manager mapping transport failures to NetworkError."""
        session = await self._get_session()
        try:
            yield session
        except aiohttp.ClientError as e:
            raise NetworkError(f"Network error: {e}") from e
        except asyncio.TimeoutError as e:
            raise NetworkError("Network error: request timed out") from e

    async def _get_json(self, endpoint: str) -> Any:
        """
        GET an endpoint and decode its JSON body.

        Args:
            endpoint: API endpoint path.

        Returns:
            Decoded JSON value.

        Raises:
            HttpError: On non-2xx response.
            NetworkError: On transport failure.
            ResponseFormatError: On a body that is not JSON.
        """
        url = f"{self._base_url}{endpoint}"

        async with self._request_context() as session:
            async with session.get(url) as response:
                if not 200 <= response.status < 300:
                    raise HttpError(response.status)
                body = await response.read()

        try:
            return orjson.loads(body)
        except orjson.JSONDecodeError as e:
            raise ResponseFormatError(f"Invalid JSON response from {endpoint}: {e}") from e

    # =========================================================================
    # Feeds
    # =========================================================================

    async def fetch_pair_identities(self) -> list[PairIdentity]:
        """
        Fetch every tradable pair.

        A null body is treated as an empty list.
        """
        try:
            data = await self._get_json(ENDPOINT_MARKET_PAIRS)
            try:
                return _PAIR_LIST.validate_python(data or [])
            except ValidationError as e:
                raise ResponseFormatError(f"Malformed market pairs: {e}") from e
        except MarketDataError as e:
            logger.error(f"Error fetching market pairs: {e}")
            raise

    async def fetch_price_summaries(self) -> list[PriceSummary]:
        """
        Fetch the latest summary for every pair.

        A null or missing ``summary`` list is treated as empty.
        """
        try:
            data = await self._get_json(ENDPOINT_MARKET_SUMMARY)
            try:
                return SummaryResponse.model_validate(data or {}).summaries
            except ValidationError as e:
                raise ResponseFormatError(f"Malformed market summary: {e}") from e
        except MarketDataError as e:
            logger.error(f"Error fetching market summaries: {e}")
            raise

    async def __aenter__(self) -> "MarketDataClient":
        """Async context manager entry."""
        await self._get_session()
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.close()
