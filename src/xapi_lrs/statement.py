"""Statement construction."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from xapi_lrs.exceptions import ValidationError
from xapi_lrs.types import Activity, Agent, Statement, Verb


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """Format *dt* as ISO-8601 UTC with millisecond precision, e.g. ``2026-01-01T00:00:00.000Z``."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def _present(value: Any) -> bool:
    # Mappings and lists count even when empty; scalars only when truthy.
    if value is None:
        return False
    return isinstance(value, (Mapping, list)) or bool(value)


def build_statement(
    default_actor: Agent,
    verb: Verb,
    object: Activity,
    result: Optional[dict] = None,
    context: Optional[dict] = None,
    actor: Optional[Agent] = None,
) -> Statement:
    """Assemble a statement ready for transmission.

    ``actor`` falls back to *default_actor* only when it is ``None``.
    ``result`` and ``context`` are left out of the record when ``None`` or
    a falsy scalar such as ``""``, ``0`` or ``False``. An empty mapping is
    still included. The timestamp is always the current instant.

    Raises:
        ValidationError: If *verb* or *object* is missing or empty.
    """
    if not verb or not object:
        raise ValidationError()

    statement: Statement = {
        "actor": default_actor if actor is None else actor,
        "verb": verb,
        "object": object,
    }
    if _present(result):
        statement["result"] = result
    if _present(context):
        statement["context"] = context
    statement["timestamp"] = format_timestamp(_utcnow())
    return statement
