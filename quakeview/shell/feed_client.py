"""USGS Feed Client - Imperative Shell.

This module handles HTTP communication with the USGS summary feeds.
All I/O is contained here; normalization is in the core module.
"""

import asyncio
import logging
from typing import Any

import requests

from quakeview.core.config import DEFAULT_FEED_BASE_URL
from quakeview.core.filters import TimeWindow


logger = logging.getLogger(__name__)


# Default timeout for feed requests (seconds)
DEFAULT_TIMEOUT = 30


class FeedError(Exception):
    """Base error for a feed request that produced no usable data."""


class NetworkError(FeedError):
    """The request failed, timed out or returned a non-2xx status."""


class ParseError(FeedError):
    """The payload is not a GeoJSON FeatureCollection."""


class FeedClient:
    """Client for fetching the time-windowed USGS summary feeds.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_FEED_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize feed client.

        Args:
            base_url: Base URL of the summary feeds
            timeout: Request timeout in seconds
            session: Optional requests session to reuse connections
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session

    def get_feed_url(self, window: TimeWindow) -> str:
        """Return the fixed feed URL for a time window."""
        return f"{self.base_url}/all_{TimeWindow(window).value}.geojson"

    def _get(self, url: str) -> requests.Response:
        getter = self.session.get if self.session is not None else requests.get
        return getter(url, timeout=self.timeout)

    def fetch_feed(self, window: TimeWindow) -> dict[str, Any]:
        """Fetch the feed for a time window.

        This method performs HTTP I/O and blocks until it completes.

        Args:
            window: Time window to fetch

        Returns:
            Parsed GeoJSON FeatureCollection

        Raises:
            NetworkError: If the request fails or returns an error status
            ParseError: If the payload is not a FeatureCollection
        """
        url = self.get_feed_url(window)

        logger.info("Fetching %s feed from USGS", TimeWindow(window).value)

        try:
            response = self._get(url)
            response.raise_for_status()
        except requests.Timeout as e:
            logger.error("USGS feed request timed out: %s", url)
            raise NetworkError(f"Request timed out: {url}") from e
        except requests.RequestException as e:
            logger.error("USGS feed request failed: %s", str(e))
            raise NetworkError(str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error("USGS feed returned invalid JSON")
            raise ParseError("Feed payload is not valid JSON") from e

        if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
            raise ParseError("Feed payload is not a GeoJSON FeatureCollection")

        if not isinstance(data.get("features"), list):
            raise ParseError("Feed payload has no features list")

        logger.info(
            "Fetched %d features from USGS",
            len(data["features"]),
        )

        return data

    async def fetch(self, window: TimeWindow) -> dict[str, Any]:
        """Fetch the feed without blocking the event loop.

        The blocking request runs in a worker thread; only the awaiting
        coroutine is suspended.

        Raises:
            NetworkError: If the request fails or returns an error status
            ParseError: If the payload is not a FeatureCollection
        """
        return await asyncio.to_thread(self.fetch_feed, window)
