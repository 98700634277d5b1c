"""FMI open data WFS client: one bounded request per call, no retries."""

import asyncio
import logging

import httpx

from fmiweather.config.defaults import FMI_BASE_URL, STORED_QUERY_DAILY
from fmiweather.config.schema import FmiConfig
from fmiweather.errors import FetchTimeoutError, FetchTransportError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "fmiweather/0.1.0"


def build_query(year: str, station_id: str, stored_query_id: str = STORED_QUERY_DAILY) -> dict[str, str]:
    """Query parameters selecting one calendar year of daily observations."""
    return {
        "service": "WFS",
        "version": "2.0.0",
        "request": "GetFeature",
        "storedquery_id": stored_query_id,
        "starttime": f"{year}-01-01",
        "endtime": f"{year}-12-31",
        "fmisid": station_id,
    }


class FmiClient:
    def __init__(
        self,
        base_url: str = FMI_BASE_URL,
        stored_query_id: str = STORED_QUERY_DAILY,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 3.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url
        self.stored_query_id = stored_query_id
        self.user_agent = user_agent
        self.timeout = timeout
        self._http = http_client

    async def fetch(self, year: str, station_id: str) -> bytes:
        """Fetch the raw WFS response for a station and year.

        The whole call, body included, is bounded by ``self.timeout``.
        Cancellation from the caller propagates into the HTTP request.
        """
        params = build_query(year, station_id, self.stored_query_id)
        headers = {"User-Agent": self.user_agent}

        logger.info(
            "Fetching data for FMI station %s with timeout %.1fs",
            station_id, self.timeout,
        )
        try:
            async with asyncio.timeout(self.timeout):
                if self._http is not None:
                    return await self._get(self._http, params, headers)
                async with httpx.AsyncClient() as client:
                    return await self._get(client, params, headers)
        except (TimeoutError, httpx.TimeoutException) as e:
            logger.error("FMI request for station %s timed out", station_id)
            raise FetchTimeoutError(
                f"FMI request exceeded {self.timeout:.1f}s"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("FMI request for station %s failed: %s", station_id, e)
            raise FetchTransportError(str(e)) from e

    async def _get(
        self, client: httpx.AsyncClient, params: dict[str, str], headers: dict[str, str]
    ) -> bytes:
        resp = await client.get(
            self.base_url, params=params, headers=headers, timeout=self.timeout
        )
        resp.raise_for_status()
        logger.debug("FMI returned %d bytes", len(resp.content))
        return resp.content


def client_from_config(fmi: FmiConfig, http_client: httpx.AsyncClient | None = None) -> FmiClient:
    """Build an FmiClient from an FmiConfig section."""
    return FmiClient(
        base_url=fmi.base_url,
        stored_query_id=fmi.stored_query_id,
        user_agent=fmi.user_agent,
        timeout=fmi.fetch_timeout_seconds,
        http_client=http_client,
    )
