"""Log output for the xapi-lrs CLI: human-readable lines or JSON lines on stderr."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from xapi_lrs.config import Settings

# Attributes the client attaches to its records through ``extra=``.
_REQUEST_FIELDS = ("method", "url", "status")
_PRETTY_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, carrying request fields when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key))
            for key in _REQUEST_FIELDS
            if getattr(record, key, None) is not None
        )
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(settings: Settings) -> None:
    """Install a single stderr handler on the root logger.

    Repeated calls are no-ops, so ``main()`` can run more than once in a process.
    """
    root = logging.getLogger()
    if getattr(root, "_xapi_lrs_configured", False):
        return
    root._xapi_lrs_configured = True  # type: ignore[attr-defined]

    level = getattr(logging, settings.log_level, logging.INFO)
    formatter = JsonFormatter() if settings.log_format == "json" else logging.Formatter(_PRETTY_FORMAT)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)

    root.setLevel(level)
    root.handlers[:] = [handler]
