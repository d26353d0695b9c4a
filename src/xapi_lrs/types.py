"""Core data types for the xAPI client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

# Statements and their parts are plain JSON records passed through untouched.
Statement = Dict[str, Any]
Agent = Dict[str, Any]
Verb = Dict[str, Any]
Activity = Dict[str, Any]

# Whatever JSON the LRS returns.
LrsResponse = Any


@dataclass
class StatementFilter:
    """Query description for ``GET /statements``.

    ``agent`` may be an agent record or the wildcard ``"*"`` (all agents).
    ``cursor`` is a continuation URL from a previous page's ``more`` link;
    when set, every other field is ignored.
    """

    agent: Optional[Union[Agent, str]] = None
    verb: Optional[str] = None
    activity: Optional[str] = None
    since: Optional[str] = None
    until: Optional[str] = None
    related_activities: Optional[bool] = None
    related_agents: Optional[bool] = None
    limit: Optional[int] = None
    descending: Optional[bool] = None
    cursor: Optional[str] = None
