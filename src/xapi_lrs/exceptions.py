"""xAPI client exceptions."""

from __future__ import annotations

from typing import Optional

from httpx import TransportError

SEND_ERROR_PREFIX = "xAPI error"
FETCH_ERROR_PREFIX = "xAPI fetch error"


class XAPIError(Exception):
    """Base class for errors raised by the xAPI client."""


class ConfigurationError(XAPIError, ValueError):
    """Raised when the client is constructed without a required option."""

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message or f"Missing {field}")


class ValidationError(XAPIError, ValueError):
    """Raised when a statement is built without a verb or an object."""

    def __init__(self, message: str = "verb and object are mandatory in a statement") -> None:
        super().__init__(message)


class LrsError(XAPIError):
    """Raised when the LRS answers with a non-success status."""

    def __init__(self, prefix: str, status_code: int, body: str) -> None:
        self.prefix = prefix
        self.status_code = status_code
        self.body = body
        super().__init__(f"{prefix} {status_code}: {body}")


__all__ = [
    "XAPIError",
    "ConfigurationError",
    "ValidationError",
    "LrsError",
    "TransportError",
    "SEND_ERROR_PREFIX",
    "FETCH_ERROR_PREFIX",
]
