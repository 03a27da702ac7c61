# services/client.py
"""
OSRMClient: fetch + decode, one entry point per service.

    async with OSRMClient() as osrm:
        resp = await osrm.fetch_route(request)

With ClientSettings(raise_errors=False) the per-service methods log the
failure and return None instead of raising.
"""
from __future__ import annotations
from typing import Optional, Type, TypeVar

from loguru import logger
from pydantic import BaseModel

from osrm_client.adapters.online.osrm_http_adapter import OSRMHttpAdapter
from osrm_client.config import ClientSettings, get_settings
from osrm_client.core.exceptions import OSRMError
from osrm_client.core.interfaces import RoutingTransport
from osrm_client.models.requests import OSRMRequest
from osrm_client.models.responses import (
    MatchResponse,
    NearestResponse,
    RouteResponse,
    TableResponse,
    TripResponse,
)
from osrm_client.services.decoder import RESPONSE_MODELS, decode_as

M = TypeVar("M", bound=BaseModel)


class OSRMClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        settings: Optional[ClientSettings] = None,
        transport: Optional[RoutingTransport] = None,
    ):
        settings = settings or get_settings()
        if base_url is not None:
            settings = settings.model_copy(update={"base_url": base_url.strip().rstrip("/")})
        self.settings = settings
        self.transport = transport or OSRMHttpAdapter(settings=settings)

    async def fetch_data(self, request: OSRMRequest) -> bytes:
        """Raw response body; always raises on failure."""
        return await self.transport.fetch(request)

    async def _fetch_typed(self, request: OSRMRequest, model: Type[M]) -> Optional[M]:
        try:
            body = await self.fetch_data(request)
            return decode_as(model, body)
        except OSRMError as e:
            if self.settings.raise_errors:
                raise
            logger.warning(
                f"OSRM {request.service.value} failed ({e.__class__.__name__}): {e}"
            )
            return None

    async def fetch_route(self, request: OSRMRequest) -> Optional[RouteResponse]:
        return await self._fetch_typed(request, RouteResponse)

    async def fetch_match(self, request: OSRMRequest) -> Optional[MatchResponse]:
        return await self._fetch_typed(request, MatchResponse)

    async def fetch_trip(self, request: OSRMRequest) -> Optional[TripResponse]:
        return await self._fetch_typed(request, TripResponse)

    async def fetch_nearest(self, request: OSRMRequest) -> Optional[NearestResponse]:
        return await self._fetch_typed(request, NearestResponse)

    async def fetch_table(self, request: OSRMRequest) -> Optional[TableResponse]:
        return await self._fetch_typed(request, TableResponse)

    async def fetch(self, request: OSRMRequest) -> Optional[BaseModel]:
        """Dispatch on request.service and decode into that service's schema."""
        model = RESPONSE_MODELS.get(request.service)
        if model is None:
            raise NotImplementedError(
                f"The '{request.service.value}' service is not supported"
            )
        return await self._fetch_typed(request, model)

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "OSRMClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

