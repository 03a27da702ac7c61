# core/exceptions.py
from __future__ import annotations

from typing import Optional


class OSRMError(Exception):
    """Base error for everything raised by the client."""


class EmptyCoordinatesError(OSRMError):
    """Raised when a request carries no coordinates (before any network call)."""

    def __init__(self, message: str = "No coordinates provided"):
        super().__init__(message)


class MalformedUrlError(OSRMError):
    """Raised when the request URL cannot be built or parsed."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Bad url: {url}")


class ApiError(OSRMError):
    """Raised when the server rejects the request (HTTP 400 or 5xx)."""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        self.reason = reason
        self.status_code = status_code
        super().__init__(reason)


class NetworkError(OSRMError):
    """Raised on transport failures and unexpected HTTP statuses."""

    def __init__(self, cause: object):
        self.cause = cause
        super().__init__(str(cause) or cause.__class__.__name__)


class ParseError(OSRMError):
    """Raised when a response body does not match the expected schema."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class UnknownError(OSRMError):
    """Catch-all for failures that fit no other category."""

    def __init__(self, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__("Unknown error" if cause is None else f"Unknown error: {cause}")
