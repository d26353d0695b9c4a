"""Query-string serialization for statement retrieval."""

from __future__ import annotations

import json
from typing import Dict, Optional
from urllib.parse import urljoin

from xapi_lrs.types import StatementFilter

AGENT_WILDCARD = "*"


def _bool_param(value: bool) -> str:
    return "true" if value else "false"


def filter_to_params(query: StatementFilter) -> Dict[str, str]:
    """Serialize *query* into ``GET /statements`` query parameters.

    The cursor is not handled here; callers use it in place of the whole
    query. Note that ``limit=0`` is treated as absent, the same as ``None``.
    """
    params: Dict[str, str] = {}
    if query.agent is not None and query.agent != AGENT_WILDCARD:
        params["agent"] = json.dumps(query.agent, separators=(",", ":"))
    if query.verb is not None:
        params["verb"] = query.verb
    if query.activity is not None:
        params["activity"] = query.activity
    if query.since is not None:
        params["since"] = query.since
    if query.until is not None:
        params["until"] = query.until
    # Explicit False is sent, unset is omitted.
    if query.related_activities is not None:
        params["related_activities"] = _bool_param(query.related_activities)
    if query.related_agents is not None:
        params["related_agents"] = _bool_param(query.related_agents)
    if query.limit:
        params["limit"] = str(query.limit)
    if query.descending:
        params["descending"] = "true"
    return params


def resolve_more(endpoint: str, more: Optional[str]) -> Optional[str]:
    """Turn an LRS ``more`` link into an absolute cursor URL.

    Standard LRSs return ``more`` relative to the server root
    (``/xapi/statements?...``); absolute links are returned unchanged.
    """
    if not more:
        return None
    return urljoin(endpoint, more)
