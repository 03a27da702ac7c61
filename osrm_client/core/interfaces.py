# core/interfaces.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, List, Tuple

from osrm_client.models.requests import OSRMRequest

QueryItems = List[Tuple[str, str]]

# One pure function per service: request -> ordered (key, value) pairs
QueryHandler = Callable[[OSRMRequest], QueryItems]


class RoutingTransport(ABC):
    """Anything that can turn an OSRMRequest into a raw response body."""

    @abstractmethod
    async def fetch(self, request: OSRMRequest) -> bytes: ...

    async def aclose(self) -> None:
        return None
