# models/responses.py
from __future__ import annotations
from typing import List, Optional, Union

import polyline
from pydantic import BaseModel, ConfigDict, Field

from osrm_client.core.coords import LatLon, to_latlon, to_latlon_list
from osrm_client.models.requests import Geometries

# Responses are only ever built by decoding a body. Unknown keys are ignored,
# wire names that are not valid/nice Python attributes are mapped via aliases.
_FROZEN = ConfigDict(frozen=True, populate_by_name=True)

POLYLINE_PRECISION = {Geometries.POLYLINE: 5, Geometries.POLYLINE6: 6}


def _precision(geometries: Union[Geometries, str]) -> int:
    fmt = Geometries(geometries)
    if fmt not in POLYLINE_PRECISION:
        raise ValueError(f"'{fmt.value}' geometries are not an encoded polyline")
    return POLYLINE_PRECISION[fmt]


class Geometry(BaseModel):
    """GeoJSON-like geometry returned with geometries=geojson."""

    model_config = _FROZEN

    type: str
    coordinates: List[List[float]]  # [[lon, lat], ...]

    @property
    def coordinates2d(self) -> List[LatLon]:
        return to_latlon_list(self.coordinates)


GeometryType = Union[str, Geometry]  # str = encoded polyline / polyline6


def geometry_to_latlon(
    geometry: Optional[GeometryType],
    geometries: Union[Geometries, str] = Geometries.POLYLINE,
) -> List[LatLon]:
    """Decode a route/step geometry; `geometries` is the format the request asked for."""
    if geometry is None:
        return []
    if isinstance(geometry, Geometry):
        return geometry.coordinates2d
    # polyline yields (lat, lon) tuples
    pairs = polyline.decode(geometry, _precision(geometries))
    return [LatLon(latitude=lat, longitude=lon) for lat, lon in pairs]


class Lane(BaseModel):
    model_config = _FROZEN

    valid: bool
    indications: List[str]


class Intersection(BaseModel):
    model_config = _FROZEN

    location: List[float]
    bearings: List[int]
    entry: List[bool]
    out: Optional[int] = None
    intersection_in: Optional[int] = Field(default=None, alias="in")
    lanes: Optional[List[Lane]] = None

    @property
    def coordinates2d(self) -> Optional[LatLon]:
        return to_latlon(self.location)


class Maneuver(BaseModel):
    model_config = _FROZEN

    location: List[float]
    bearing_before: Optional[float] = None
    bearing_after: Optional[float] = None
    type: str
    modifier: Optional[str] = None
    exit: Optional[int] = None  # roundabouts

    @property
    def coordinates2d(self) -> Optional[LatLon]:
        return to_latlon(self.location)


class Step(BaseModel):
    model_config = _FROZEN

    intersections: Optional[List[Intersection]] = None
    driving_side: str
    geometry: GeometryType
    maneuver: Maneuver
    name: str
    mode: str
    weight: float
    duration: float
    distance: float

    def coordinates2d(
        self, geometries: Union[Geometries, str] = Geometries.POLYLINE
    ) -> List[LatLon]:
        return geometry_to_latlon(self.geometry, geometries)


class Leg(BaseModel):
    model_config = _FROZEN

    summary: str
    weight: float
    duration: float
    distance: Optional[float] = None
    steps: List[Step] = Field(default_factory=list)


class Route(BaseModel):
    """A route, trip or matching; confidence is only set for matchings."""

    model_config = _FROZEN

    geometry: Optional[GeometryType] = None  # absent with overview=false
    legs: List[Leg] = Field(default_factory=list)
    weight_name: str
    weight: float
    duration: float
    distance: float
    confidence: Optional[float] = None

    def coordinates2d(
        self, geometries: Union[Geometries, str] = Geometries.POLYLINE
    ) -> List[LatLon]:
        """Route geometry as LatLon pairs; pass Geometries.POLYLINE6 for polyline6 routes."""
        return geometry_to_latlon(self.geometry, geometries)


class Point(BaseModel):
    """Waypoint, tracepoint, nearest candidate or table source/destination."""

    model_config = _FROZEN

    name: str
    location: List[float]  # [lon, lat]
    distance: Optional[float] = None  # snapping distance in meters
    hint: Optional[str] = None

    # route / match input waypoints
    alternatives_count: Optional[int] = None
    waypoint_index: Optional[int] = None
    # match tracepoints
    matchings_index: Optional[int] = None
    # trip waypoints
    trips_index: Optional[int] = None

    @property
    def coordinates2d(self) -> Optional[LatLon]:
        return to_latlon(self.location)


# ---- top-level responses ----
class OSRMResponse(BaseModel):
    model_config = _FROZEN

    code: str
    message: Optional[str] = None


class RouteResponse(OSRMResponse):
    routes: List[Route] = Field(default_factory=list)
    waypoints: List[Optional[Point]] = Field(default_factory=list)


class MatchResponse(OSRMResponse):
    matchings: List[Route] = Field(default_factory=list)
    tracepoints: List[Optional[Point]] = Field(default_factory=list)


class TripResponse(OSRMResponse):
    trips: List[Route] = Field(default_factory=list)
    waypoints: List[Optional[Point]] = Field(default_factory=list)


class NearestResponse(OSRMResponse):
    waypoints: List[Point] = Field(default_factory=list)

    @property
    def coordinates2d(self) -> List[LatLon]:
        return [p.coordinates2d for p in self.waypoints if p.coordinates2d is not None]


class TableResponse(OSRMResponse):
    # rows = sources, cols = destinations, None = unreachable
    durations: Optional[List[List[Optional[float]]]] = None
    distance: Optional[float] = None
    distances: Optional[List[List[Optional[float]]]] = None
    sources: List[Point] = Field(default_factory=list)
    destinations: List[Point] = Field(default_factory=list)
    fallback_speed_cells: Optional[List[List[int]]] = None  # [[row, col], ...]

    @property
    def sources_coordinates2d(self) -> List[LatLon]:
        return [p.coordinates2d for p in self.sources if p.coordinates2d is not None]

    @property
    def destinations_coordinates2d(self) -> List[LatLon]:
        return [
            p.coordinates2d for p in self.destinations if p.coordinates2d is not None
        ]
