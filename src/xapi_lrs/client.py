"""HTTP clients for an xAPI Learning Record Store.

Usage::

    with XAPI(endpoint, username, password, actor) as xapi:
        xapi.send_statement(verb=Verbs["completed"], object={"id": "https://example.com/course/1"})
        page = xapi.get_statements(limit=10)

    async with AsyncXAPI(endpoint, username, password, actor) as xapi:
        await xapi.send_statement(verb=Verbs["completed"], object={"id": "..."})
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, AsyncIterator, Dict, Iterator, Optional, Tuple

import httpx

from xapi_lrs.config import Settings
from xapi_lrs.exceptions import (
    FETCH_ERROR_PREFIX,
    SEND_ERROR_PREFIX,
    ConfigurationError,
    LrsError,
)
from xapi_lrs.query import filter_to_params, resolve_more
from xapi_lrs.statement import build_statement
from xapi_lrs.types import Activity, Agent, LrsResponse, Statement, StatementFilter, Verb

logger = logging.getLogger("xapi_lrs.client")

XAPI_VERSION = "1.0.3"
STATEMENTS_SUFFIX = "/statements"


def _normalize_endpoint(endpoint: str) -> str:
    if endpoint.endswith(STATEMENTS_SUFFIX):
        return endpoint
    return endpoint + STATEMENTS_SUFFIX


def _coerce_filter(query: Optional[StatementFilter], fields: Dict[str, Any]) -> StatementFilter:
    if query is None:
        return StatementFilter(**fields)
    if fields:
        raise TypeError("Pass either a StatementFilter or filter keywords, not both")
    return query


def _parse_response(resp: httpx.Response, prefix: str) -> LrsResponse:
    logger.debug("LRS responded %d", resp.status_code, extra={"status": resp.status_code})
    if not resp.is_success:
        raise LrsError(prefix, resp.status_code, resp.text)
    return resp.json()


class _BaseXAPI:
    """Configuration and request assembly shared by the sync and async clients."""

    def __init__(
        self,
        endpoint: str,
        username: str,
        password: str,
        actor: Agent,
    ) -> None:
        for name, value in (
            ("endpoint", endpoint),
            ("username", username),
            ("password", password),
            ("actor", actor),
        ):
            if not value:
                raise ConfigurationError(name)

        self._endpoint = _normalize_endpoint(endpoint)
        self._username = username
        self._password = password
        self._actor = actor

    @classmethod
    def from_env(cls, **kwargs: Any) -> Any:
        """Build a client from ``XAPI_*`` environment variables.

        Extra keyword arguments (``transport``, ``timeout``) go to the constructor.
        """
        settings = Settings.from_env()
        return cls(
            settings.endpoint,
            settings.username,
            settings.password,
            settings.actor,
            **kwargs,
        )

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def username(self) -> str:
        return self._username

    @property
    def actor(self) -> Agent:
        return self._actor

    def build_statement(
        self,
        verb: Verb,
        object: Activity,
        result: Optional[dict] = None,
        context: Optional[dict] = None,
        actor: Optional[Agent] = None,
    ) -> Statement:
        """Build a statement, using the configured actor unless *actor* is given."""
        return build_statement(
            self._actor, verb, object, result=result, context=context, actor=actor
        )

    def _auth_header(self) -> str:
        token = base64.b64encode(f"{self._username}:{self._password}".encode("utf-8"))
        return f"Basic {token.decode('ascii')}"

    def _send_request(self, statement: Statement) -> Dict[str, Any]:
        return {
            "url": self._endpoint,
            "content": json.dumps(statement),
            "headers": {
                "Content-Type": "application/json",
                "X-Experience-API-Version": XAPI_VERSION,
                "Authorization": self._auth_header(),
            },
        }

    def _fetch_request(self, query: StatementFilter) -> Dict[str, Any]:
        url: str
        params: Optional[Dict[str, str]]
        if query.cursor:
            url, params = query.cursor, None
        else:
            url, params = self._endpoint, filter_to_params(query) or None
        return {
            "url": url,
            "params": params,
            "headers": {
                "X-Experience-API-Version": XAPI_VERSION,
                "Authorization": self._auth_header(),
            },
        }

    def _next_cursor(self, page: LrsResponse) -> Tuple[list, Optional[str]]:
        statements = page.get("statements", []) if isinstance(page, dict) else []
        more = page.get("more") if isinstance(page, dict) else None
        return statements, resolve_more(self._endpoint, more)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(endpoint={self._endpoint!r}, username={self._username!r})"


class XAPI(_BaseXAPI):
    """Synchronous xAPI client.

    Parameters:
        endpoint: LRS base URL. ``/statements`` is appended unless already present.
        username: Basic-auth user (the LRS key).
        password: Basic-auth password (the LRS secret).
        actor: Agent used for statements that don't name one.
        transport: Optional ``httpx.BaseTransport``; defaults to a real network transport.
        timeout: Request timeout in seconds. ``None`` (default) means no timeout.
    """

    def __init__(
        self,
        endpoint: str,
        username: str,
        password: str,
        actor: Agent,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: Optional[float] = None,
    ) -> None:
        super().__init__(endpoint, username, password, actor)
        self._http = httpx.Client(transport=transport, timeout=timeout)

    def send(self, statement: Statement) -> LrsResponse:
        """POST an already built statement. Returns the LRS JSON body."""
        req = self._send_request(statement)
        logger.debug("POST %s", req["url"], extra={"method": "POST", "url": req["url"]})
        resp = self._http.post(req["url"], content=req["content"], headers=req["headers"])
        return _parse_response(resp, SEND_ERROR_PREFIX)

    def send_statement(
        self,
        verb: Verb,
        object: Activity,
        result: Optional[dict] = None,
        context: Optional[dict] = None,
        actor: Optional[Agent] = None,
    ) -> LrsResponse:
        """Build a statement and send it to the LRS.

        Raises:
            ValidationError: If *verb* or *object* is missing; nothing is sent.
            LrsError: If the LRS answers with a non-success status.
            TransportError: If the request never reaches the LRS.
        """
        statement = self.build_statement(verb, object, result=result, context=context, actor=actor)
        return self.send(statement)

    def get_statements(self, query: Optional[StatementFilter] = None, **fields: Any) -> LrsResponse:
        """Fetch one page of statements.

        Accepts a :class:`StatementFilter` or its fields as keywords. A
        ``cursor`` from a previous page's ``more`` link replaces the query.
        """
        req = self._fetch_request(_coerce_filter(query, fields))
        logger.debug("GET %s", req["url"], extra={"method": "GET", "url": req["url"]})
        resp = self._http.get(req["url"], params=req["params"], headers=req["headers"])
        return _parse_response(resp, FETCH_ERROR_PREFIX)

    def iter_statements(self, query: Optional[StatementFilter] = None, **fields: Any) -> Iterator[Statement]:
        """Yield statements across pages, following ``more`` links until exhausted."""
        query = _coerce_filter(query, fields)
        while True:
            statements, cursor = self._next_cursor(self.get_statements(query))
            yield from statements
            if not cursor:
                return
            query = StatementFilter(cursor=cursor)

    def close(self) -> None:
        """Close the HTTP client."""
        self._http.close()

    def __enter__(self) -> "XAPI":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


class AsyncXAPI(_BaseXAPI):
    """Async xAPI client. Same parameters as :class:`XAPI`, with an
    ``httpx.AsyncBaseTransport`` for *transport*."""

    def __init__(
        self,
        endpoint: str,
        username: str,
        password: str,
        actor: Agent,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ) -> None:
        super().__init__(endpoint, username, password, actor)
        self._http = httpx.AsyncClient(transport=transport, timeout=timeout)

    async def __aenter__(self) -> "AsyncXAPI":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._http.aclose()

    async def send(self, statement: Statement) -> LrsResponse:
        req = self._send_request(statement)
        logger.debug("POST %s", req["url"], extra={"method": "POST", "url": req["url"]})
        resp = await self._http.post(req["url"], content=req["content"], headers=req["headers"])
        return _parse_response(resp, SEND_ERROR_PREFIX)

    async def send_statement(
        self,
        verb: Verb,
        object: Activity,
        result: Optional[dict] = None,
        context: Optional[dict] = None,
        actor: Optional[Agent] = None,
    ) -> LrsResponse:
        statement = self.build_statement(verb, object, result=result, context=context, actor=actor)
        return await self.send(statement)

    async def get_statements(self, query: Optional[StatementFilter] = None, **fields: Any) -> LrsResponse:
        req = self._fetch_request(_coerce_filter(query, fields))
        logger.debug("GET %s", req["url"], extra={"method": "GET", "url": req["url"]})
        resp = await self._http.get(req["url"], params=req["params"], headers=req["headers"])
        return _parse_response(resp, FETCH_ERROR_PREFIX)

    async def iter_statements(
        self, query: Optional[StatementFilter] = None, **fields: Any
    ) -> AsyncIterator[Statement]:
        query = _coerce_filter(query, fields)
        while True:
            statements, cursor = self._next_cursor(await self.get_statements(query))
            for statement in statements:
                yield statement
            if not cursor:
                return
            query = StatementFilter(cursor=cursor)
