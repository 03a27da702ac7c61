# services/decoder.py
from __future__ import annotations
from typing import Dict, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from osrm_client.core.exceptions import ParseError
from osrm_client.models.requests import Service
from osrm_client.models.responses import (
    MatchResponse,
    NearestResponse,
    RouteResponse,
    TableResponse,
    TripResponse,
)

M = TypeVar("M", bound=BaseModel)

RESPONSE_MODELS: Dict[Service, Type[BaseModel]] = {
    Service.ROUTE: RouteResponse,
    Service.MATCH: MatchResponse,
    Service.TRIP: TripResponse,
    Service.NEAREST: NearestResponse,
    Service.TABLE: TableResponse,
}


def decode_as(model: Type[M], body: Union[bytes, str]) -> M:
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        raise ParseError(f"{model.__name__}: {e}") from e


def decode_response(service: Service, body: Union[bytes, str]) -> BaseModel:
    """Decode a response body into the schema of the given service."""
    model = RESPONSE_MODELS.get(service)
    if model is None:
        raise NotImplementedError(f"No response schema for the '{service.value}' service")
    return decode_as(model, body)
