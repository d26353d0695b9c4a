"""xapi-lrs: a small client for sending and fetching xAPI statements."""

from xapi_lrs.client import AsyncXAPI, XAPI
from xapi_lrs.exceptions import (
    ConfigurationError,
    LrsError,
    TransportError,
    ValidationError,
    XAPIError,
)
from xapi_lrs.statement import build_statement
from xapi_lrs.types import StatementFilter
from xapi_lrs.verbs import ADLVerbs, Verbs

__all__ = [
    "XAPI",
    "AsyncXAPI",
    "StatementFilter",
    "build_statement",
    "Verbs",
    "ADLVerbs",
    "XAPIError",
    "ConfigurationError",
    "ValidationError",
    "LrsError",
    "TransportError",
]
