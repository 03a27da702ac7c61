# core/register_queries.py
from __future__ import annotations

from osrm_client.core.interfaces import QueryHandler
from osrm_client.core.query_registry import QueryHandlerRegistry
from osrm_client.models.requests import Service

_registered = False


def _safe_register(service: Service, handler: QueryHandler) -> None:
    """Idempotent: a handler already registered for the service is kept."""
    if not QueryHandlerRegistry.is_registered(service):
        QueryHandlerRegistry.register(service, handler)


def register_queries() -> None:
    """Register the built-in query handlers, one per service."""
    global _registered
    if _registered:
        return

    from osrm_client.services.query_builder import (
        match_query,
        nearest_query,
        route_query,
        table_query,
        tile_query,
        trip_query,
    )

    _safe_register(Service.ROUTE, route_query)
    _safe_register(Service.MATCH, match_query)
    _safe_register(Service.TRIP, trip_query)
    _safe_register(Service.NEAREST, nearest_query)
    _safe_register(Service.TABLE, table_query)
    _safe_register(Service.TILE, tile_query)

    _registered = True
