# services/query_builder.py
"""
Query parameters for each OSRM service.

Every handler is a pure function returning an ordered list of (key, value)
string pairs. build_query() picks the handler registered for the request's
service and appends the `bearings` parameter last.

Positional parameters (radiuses, bearings) keep one segment per coordinate,
so a coordinate without a value still yields an empty segment: ";50;".
"""
from __future__ import annotations
from typing import Callable, Optional, Sequence

from osrm_client.core.coords import format_bool, format_number
from osrm_client.core.interfaces import QueryItems
from osrm_client.core.query_registry import QueryHandlerRegistry
from osrm_client.models.requests import OSRMCoordinate, OSRMRequest, Service


# --- positional helpers ---


def _join_positional(
    coords: Sequence[OSRMCoordinate],
    fmt: Callable[[OSRMCoordinate], Optional[str]],
) -> Optional[str]:
    """Join one segment per coordinate; None when every segment is blank."""
    joined = ";".join(fmt(c) or "" for c in coords)
    if not joined.replace(";", "").strip():
        return None
    return joined


def _radius(c: OSRMCoordinate) -> Optional[str]:
    if c.radius is None:
        return None
    if isinstance(c.radius, str):
        return c.radius  # "unlimited"
    return format_number(c.radius)


def _bearing(c: OSRMCoordinate) -> Optional[str]:
    if c.bearing is None:
        return None
    return f"{c.bearing.value},{c.bearing.range}"


def radiuses_param(request: OSRMRequest) -> Optional[str]:
    return _join_positional(request.coordinates, _radius)


def bearings_param(request: OSRMRequest) -> Optional[str]:
    return _join_positional(request.coordinates, _bearing)


def _join_ints(values: Sequence[int]) -> str:
    return ";".join(str(v) for v in values)


# --- per-service handlers ---


def general_options(request: OSRMRequest) -> QueryItems:
    items: QueryItems = [
        ("steps", format_bool(request.steps)),
        ("geometries", request.geometries.value),
        ("overview", request.overview.value),
    ]
    if request.annotations is not None:
        items.append(("annotations", request.annotations))
    return items


def route_query(request: OSRMRequest) -> QueryItems:
    items = general_options(request)
    if request.alternatives is not None:
        items.append(("alternatives", format_bool(request.alternatives)))
    if request.continue_straight is not None:
        items.append(("continue_straight", format_bool(request.continue_straight)))
    return items


def trip_query(request: OSRMRequest) -> QueryItems:
    return general_options(request)


def match_query(request: OSRMRequest) -> QueryItems:
    items = general_options(request)
    if request.timestamps is not None:
        items.append(("timestamps", _join_ints(request.timestamps)))
    if request.tidy is not None:
        items.append(("tidy", format_bool(request.tidy)))
    if request.snapping is not None:
        items.append(("snapping", request.snapping.value))
    radiuses = radiuses_param(request)
    if radiuses is not None:
        items.append(("radiuses", radiuses))
    if request.exclude:
        items.append(("exclude", ",".join(request.exclude)))
    return items


def nearest_query(request: OSRMRequest) -> QueryItems:
    # nearest takes no general options
    items: QueryItems = []
    radiuses = radiuses_param(request)
    if radiuses is not None:
        items.append(("radiuses", radiuses))
    if request.number is not None:
        items.append(("number", str(request.number)))
    return items


def table_query(request: OSRMRequest) -> QueryItems:
    # table takes no general options and no bearings
    items: QueryItems = []
    if request.sources:
        items.append(("sources", _join_ints(request.sources)))
    if request.destinations:
        items.append(("destinations", _join_ints(request.destinations)))
    if request.fallback_speed is not None:
        items.append(("fallback_speed", format_number(request.fallback_speed)))
    if request.fallback_coordinate is not None:
        items.append(("fallback_coordinate", request.fallback_coordinate.value))
    if request.scale_factor is not None:
        items.append(("scale_factor", format_number(request.scale_factor)))
    return items


def tile_query(request: OSRMRequest) -> QueryItems:
    # TODO: tile URLs need a zoom/x/y path suffix; only general options for now
    return general_options(request)


# --- dispatcher ---


def build_query(request: OSRMRequest) -> QueryItems:
    if not QueryHandlerRegistry.is_registered(request.service):
        from osrm_client.core.register_queries import register_queries

        register_queries()

    items = QueryHandlerRegistry.get(request.service)(request)

    if request.service != Service.TABLE and request.has_bearings:
        items.append(("bearings", bearings_param(request)))
    return items
