"""Catalogues of common xAPI verbs.

``Verbs`` holds the handful most tracking code needs; ``ADLVerbs`` is the
wider ADL vocabulary. Both map a short name to a ``{id, display}`` record
ready to drop into a statement.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping

ADL_VERB_PREFIX = "http://adlnet.gov/expapi/verbs/"


def _adl(name: str) -> Dict[str, Any]:
    return {"id": ADL_VERB_PREFIX + name, "display": {"en-US": name}}


Verbs: Mapping[str, Dict[str, Any]] = MappingProxyType({
    name: _adl(name)
    for name in ("initialized", "completed", "interacted", "answered", "experienced")
})

ADLVerbs: Mapping[str, Dict[str, Any]] = MappingProxyType({
    name: _adl(name)
    for name in (
        "answered",
        "asked",
        "attempted",
        "attended",
        "commented",
        "completed",
        "exited",
        "experienced",
        "failed",
        "imported",
        "initialized",
        "interacted",
        "launched",
        "mastered",
        "passed",
        "preferred",
        "progressed",
        "registered",
        "responded",
        "resumed",
        "scored",
        "shared",
        "suspended",
        "terminated",
        "voided",
    )
})
