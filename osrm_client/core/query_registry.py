# core/query_registry.py
from typing import Dict, List, Union

from osrm_client.core.interfaces import QueryHandler
from osrm_client.models.requests import Service


def _key(service: Union[Service, str]) -> Service:
    return service if isinstance(service, Service) else Service(service.lower().strip())


class QueryHandlerRegistry:
    _handlers: Dict[Service, QueryHandler] = {}

    @classmethod
    def register(cls, service: Union[Service, str], handler: QueryHandler) -> None:
        key = _key(service)
        if key in cls._handlers:
            raise ValueError(f"Query handler for '{key.value}' is already registered.")
        cls._handlers[key] = handler

    @classmethod
    def get(cls, service: Union[Service, str]) -> QueryHandler:
        key = _key(service)
        if key not in cls._handlers:
            raise ValueError(f"No query handler registered for '{key.value}'.")
        return cls._handlers[key]

    @classmethod
    def is_registered(cls, service: Union[Service, str]) -> bool:
        return _key(service) in cls._handlers

    @classmethod
    def list_services(cls) -> List[str]:
        return sorted(s.value for s in cls._handlers)
