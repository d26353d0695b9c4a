"""Client configuration from environment variables."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from xapi_lrs.exceptions import ConfigurationError


def _actor_from_env(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise ConfigurationError("actor", "Invalid actor JSON in XAPI_ACTOR") from exc


@dataclass
class Settings:
    """Connection settings loaded from environment."""

    endpoint: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    actor: Optional[Dict[str, Any]] = None

    log_format: str = "pretty"  # "json" or "pretty"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, actor: Optional[Dict[str, Any]] = None) -> Settings:
        """Load settings from ``XAPI_*`` and ``LOG_*``.

        ``XAPI_ACTOR`` is only read when no *actor* is supplied.
        """
        if actor is None:
            actor = _actor_from_env(os.environ.get("XAPI_ACTOR"))
        return cls(
            endpoint=os.environ.get("XAPI_ENDPOINT", ""),
            username=os.environ.get("XAPI_USERNAME", ""),
            password=os.environ.get("XAPI_PASSWORD", ""),
            actor=actor,
            log_format=os.environ.get("LOG_FORMAT", "pretty"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
