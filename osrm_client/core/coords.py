# core/coords.py
from __future__ import annotations
import math
from decimal import Decimal
from typing import Any, Iterable, List, NamedTuple, Optional, Sequence, Union


class LatLon(NamedTuple):
    latitude: float
    longitude: float


def to_latlon(location: Optional[Sequence[float]]) -> Optional[LatLon]:
    """OSRM locations are [lon, lat]; anything other than a pair gives None."""
    if location is None or len(location) != 2:
        return None
    return LatLon(latitude=float(location[1]), longitude=float(location[0]))


def to_latlon_list(locations: Iterable[Sequence[float]]) -> List[LatLon]:
    """Geometry positions -> LatLon, dropping entries with fewer than two values."""
    return [
        LatLon(latitude=float(loc[1]), longitude=float(loc[0]))
        for loc in locations
        if len(loc) >= 2
    ]


def format_number(value: Union[int, float]) -> str:
    """50.0 -> '50', 12.5 -> '12.5', 1e-05 -> '0.00001'; never exponent notation."""
    if isinstance(value, bool):
        return format_bool(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"cannot format non-finite number {value!r}")
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    return str(value)


def format_bool(value: bool) -> str:
    return "true" if value else "false"


def format_path(coords: Iterable[Any]) -> str:
    """Coordinate path segment 'lon,lat;lon,lat;...' from objects with .longitude/.latitude."""
    return ";".join(f"{c.longitude},{c.latitude}" for c in coords)
