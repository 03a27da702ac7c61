# adapters/online/osrm_http_adapter.py
from __future__ import annotations
import asyncio
from typing import Optional
from urllib.parse import quote, urlencode

import httpx
from loguru import logger

from osrm_client.config import ClientSettings, get_settings
from osrm_client.core.coords import format_path
from osrm_client.core.exceptions import (
    ApiError,
    EmptyCoordinatesError,
    MalformedUrlError,
    NetworkError,
    UnknownError,
)
from osrm_client.core.interfaces import RoutingTransport
from osrm_client.models.requests import OSRMRequest
from osrm_client.services.query_builder import build_query

# OSRM list separators stay literal on the wire: radiuses=;50; exclude=toll,ferry
QUERY_SAFE = ";,"


class OSRMHttpAdapter(RoutingTransport):
    """
    RoutingTransport backed by the OSRM HTTP API.
    - One GET per fetch(); no retries, no caching.
    - The shared httpx.AsyncClient is safe for overlapping calls.
    - Returns the raw body of a 200 response; everything else raises an OSRMError.
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.request_timeout),
        )

    @property
    def base_url(self) -> str:
        return self.settings.base_url

    def build_url(self, request: OSRMRequest) -> httpx.URL:
        if not request.coordinates:
            raise EmptyCoordinatesError()

        raw = (
            f"{self.base_url}/{request.service.value}/{request.version}"
            f"/{request.profile.value}/{format_path(request.coordinates)}"
        )
        query = urlencode(build_query(request), safe=QUERY_SAFE, quote_via=quote)
        if query:
            raw = f"{raw}?{query}"
        try:
            url = httpx.URL(raw)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise MalformedUrlError(raw) from e
        if not url.scheme or not url.host:
            raise MalformedUrlError(raw)
        return url

    async def fetch(self, request: OSRMRequest) -> bytes:
        url = self.build_url(request)
        logger.debug(f"OSRM {request.service.value}: GET {url}")

        try:
            response = await asyncio.wait_for(
                self._client.get(
                    url,
                    headers={
                        "Accept": self.settings.accept_type,
                        "Content-Type": self.settings.content_type,
                    },
                ),
                timeout=self.settings.resource_timeout,
            )
        except (httpx.TransportError, asyncio.TimeoutError) as e:
            raise NetworkError(e) from e
        except Exception as e:
            raise UnknownError(e) from e

        return self._classify(response)

    @staticmethod
    def _classify(response: httpx.Response) -> bytes:
        status = response.status_code
        logger.debug(f"OSRM response status={status}, bytes={len(response.content)}")
        if status == 400:
            raise ApiError("Error", status_code=status)
        if 500 <= status < 600:
            raise ApiError("Server error", status_code=status)
        if status != 200:
            raise NetworkError(f"Unexpected HTTP status {status}")
        return response.content

    async def aclose(self) -> None:
        """Close the underlying HTTP client (only if this adapter created it)."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "OSRMHttpAdapter":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
