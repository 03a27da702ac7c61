# services/data_model.py
from __future__ import annotations
from typing import Any, Dict, Optional

from osrm_client.models.requests import OSRMRequest, Service
from osrm_client.models.responses import (
    MatchResponse,
    NearestResponse,
    RouteResponse,
    TableResponse,
    TripResponse,
)
from osrm_client.services.client import OSRMClient


class OSRMDataModel:
    """
    Keeps the latest decoded response per service for a UI/presentation layer.
    - Last write wins, no history; concurrent calls race on the stored value.
    - A raising client leaves the slot untouched on failure; a non-raising
      one (raise_errors=False) overwrites it with None.
    """

    def __init__(self, client: Optional[OSRMClient] = None, base_url: Optional[str] = None):
        if client is not None and base_url is not None:
            raise ValueError("pass either client or base_url, not both")
        self.client = client or OSRMClient(base_url=base_url)
        self._responses: Dict[Service, Any] = {}

    def latest(self, service: Service) -> Optional[Any]:
        return self._responses.get(service)

    @property
    def route_response(self) -> Optional[RouteResponse]:
        return self._responses.get(Service.ROUTE)

    @property
    def match_response(self) -> Optional[MatchResponse]:
        return self._responses.get(Service.MATCH)

    @property
    def trip_response(self) -> Optional[TripResponse]:
        return self._responses.get(Service.TRIP)

    @property
    def nearest_response(self) -> Optional[NearestResponse]:
        return self._responses.get(Service.NEAREST)

    @property
    def table_response(self) -> Optional[TableResponse]:
        return self._responses.get(Service.TABLE)

    async def get_osrm_response(self, request: OSRMRequest) -> Optional[Any]:
        """Fetch for request.service and store the result in that service's slot."""
        handlers = {
            Service.ROUTE: self.get_route_response,
            Service.MATCH: self.get_match_response,
            Service.TRIP: self.get_trip_response,
            Service.NEAREST: self.get_nearest_response,
            Service.TABLE: self.get_table_response,
        }
        handler = handlers.get(request.service)
        if handler is None:
            raise NotImplementedError(
                f"The '{request.service.value}' service is not supported"
            )
        return await handler(request)

    async def get_route_response(self, request: OSRMRequest) -> Optional[RouteResponse]:
        resp = await self.client.fetch_route(request)
        self._responses[Service.ROUTE] = resp
        return resp

    async def get_match_response(self, request: OSRMRequest) -> Optional[MatchResponse]:
        resp = await self.client.fetch_match(request)
        self._responses[Service.MATCH] = resp
        return resp

    async def get_trip_response(self, request: OSRMRequest) -> Optional[TripResponse]:
        resp = await self.client.fetch_trip(request)
        self._responses[Service.TRIP] = resp
        return resp

    async def get_nearest_response(self, request: OSRMRequest) -> Optional[NearestResponse]:
        resp = await self.client.fetch_nearest(request)
        self._responses[Service.NEAREST] = resp
        return resp

    async def get_table_response(self, request: OSRMRequest) -> Optional[TableResponse]:
        resp = await self.client.fetch_table(request)
        self._responses[Service.TABLE] = resp
        return resp
