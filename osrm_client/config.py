# osrm_client/config.py
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://router.project-osrm.org"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class ClientSettings(BaseModel):
    """Connection settings for an OSRM server. Every field can be overridden per client."""

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    # seconds; request_timeout covers connect/read/write, resource_timeout the whole call
    request_timeout: float = Field(default=30.0, gt=0)
    resource_timeout: float = Field(default=30.0, gt=0)
    accept_type: str = JSON_CONTENT_TYPE
    content_type: str = JSON_CONTENT_TYPE
    # False: per-service fetches log and return None instead of raising
    raise_errors: bool = True

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.strip().rstrip("/")


def get_settings() -> ClientSettings:
    return ClientSettings()
