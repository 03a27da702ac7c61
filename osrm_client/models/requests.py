# models/requests.py
from __future__ import annotations
import math
from enum import Enum
from typing import Any, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    field_validator,
    model_validator,
)


# ---- enums ----
class Profile(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"
    CYCLING = "cycling"


class Service(str, Enum):
    ROUTE = "route"
    MATCH = "match"
    TRIP = "trip"
    NEAREST = "nearest"
    TABLE = "table"
    TILE = "tile"  # query building only, see decoder


class Geometries(str, Enum):
    POLYLINE = "polyline"
    POLYLINE6 = "polyline6"
    GEOJSON = "geojson"


class Overview(str, Enum):
    SIMPLIFIED = "simplified"
    FULL = "full"
    FALSE = "false"


class Snapping(str, Enum):
    DEFAULT = "default"
    ANY = "any"


class FallbackCoordinate(str, Enum):
    INPUT = "input"
    SNAPPED = "snapped"


# ---- per-coordinate options ----
class OSRMBearing(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: int = Field(ge=0, le=360)
    range: int = Field(ge=0, le=180)  # allowed deviation


class OSRMCoordinate(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    latitude: float = Field(ge=-90, le=90, alias="lat")
    longitude: float = Field(ge=-180, le=180, alias="lon")

    bearing: Optional[OSRMBearing] = None
    radius: Optional[Union[float, Literal["unlimited"]]] = None  # meters
    hint: Optional[str] = None  # from a previous response, never sent

    @field_validator("radius")
    @classmethod
    def _non_negative_radius(cls, v):
        if isinstance(v, float) and (not math.isfinite(v) or v < 0):
            raise ValueError("radius must be a finite number >= 0 or 'unlimited'")
        return v


# ---- request ----
class OSRMRequest(BaseModel):
    """One call against the OSRM HTTP API.

    General options apply to route/match/trip (and tile). The remaining
    fields are read only by the service they belong to and ignored by the
    others.
    """

    model_config = ConfigDict(frozen=True)

    profile: Profile = Profile.DRIVING
    coordinates: List[OSRMCoordinate] = Field(default_factory=list)
    service: Service = Service.ROUTE
    version: str = "v1"

    # general options
    steps: bool = False
    geometries: Geometries = Geometries.POLYLINE
    overview: Overview = Overview.SIMPLIFIED
    annotations: Optional[str] = None  # "true", "false" or "duration,distance,..."

    # route
    alternatives: Optional[bool] = None
    continue_straight: Optional[bool] = None  # None = server default

    # match
    timestamps: Optional[List[int]] = None  # seconds since UNIX epoch
    tidy: Optional[bool] = None
    snapping: Optional[Snapping] = None
    exclude: Optional[List[str]] = None  # ["toll", "motorway", "ferry", ...]

    # nearest
    number: Optional[PositiveInt] = None

    # table
    sources: Optional[List[int]] = None
    destinations: Optional[List[int]] = None
    fallback_speed: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)  # m/s
    fallback_coordinate: Optional[FallbackCoordinate] = None
    scale_factor: Optional[float] = Field(default=None, gt=0, allow_inf_nan=False)

    @field_validator("annotations", mode="before")
    @classmethod
    def _coerce_annotations(cls, v: Any):
        """Accept True/False or a list of annotation names as well as the raw string."""
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, (list, tuple)):
            return ",".join(str(x).strip() for x in v)
        return v

    @field_validator("exclude", mode="before")
    @classmethod
    def _coerce_exclude(cls, v: Any):
        # "toll" -> ["toll"], "toll,ferry" -> ["toll", "ferry"]
        if isinstance(v, str):
            return [x.strip() for x in v.split(",") if x.strip()]
        return v

    @model_validator(mode="after")
    def _timestamps_align_with_coordinates(self) -> "OSRMRequest":
        if self.timestamps is not None and len(self.timestamps) != len(
            self.coordinates
        ):
            raise ValueError(
                f"timestamps must have one entry per coordinate "
                f"({len(self.timestamps)} != {len(self.coordinates)})"
            )
        return self

    @property
    def has_bearings(self) -> bool:
        return any(c.bearing is not None for c in self.coordinates)
