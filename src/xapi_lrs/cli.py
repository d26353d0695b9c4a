"""Minimal CLI for the xAPI client using argparse."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Optional, Sequence

from xapi_lrs.client import XAPI
from xapi_lrs.config import Settings
from xapi_lrs.exceptions import ConfigurationError, TransportError, XAPIError
from xapi_lrs.logging_config import setup_logging
from xapi_lrs.types import StatementFilter
from xapi_lrs.verbs import ADLVerbs


def _json_arg(value: str) -> Any:
    try:
        return json.loads(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid JSON: {value!r}")


def _bool_arg(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def _agent_arg(value: str) -> Any:
    if value == "*":
        return value
    return _json_arg(value)


def _resolve_verb(value: str) -> Dict[str, Any]:
    """Look up a catalogued verb by name, or wrap a verb URI."""
    if value in ADLVerbs:
        return dict(ADLVerbs[value])
    if value.startswith(("http://", "https://")):
        return {"id": value}
    raise argparse.ArgumentTypeError(f"unknown verb {value!r}; use a verb URI or one of: {', '.join(ADLVerbs)}")


def _settings(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env(actor=args.actor)
    if args.endpoint:
        settings.endpoint = args.endpoint
    if args.username:
        settings.username = args.username
    if args.password:
        settings.password = args.password
    return settings


def _get_client(settings: Settings) -> XAPI:
    return XAPI(settings.endpoint, settings.username, settings.password, settings.actor)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_send(args: argparse.Namespace, settings: Settings) -> None:
    with _get_client(settings) as xapi:
        result = xapi.send_statement(
            verb=args.verb,
            object={"id": args.object_id},
            result=args.result,
            context=args.context,
        )
    _print_json(result)


def cmd_statements(args: argparse.Namespace, settings: Settings) -> None:
    query = StatementFilter(
        agent=args.agent,
        verb=args.verb,
        activity=args.activity,
        since=args.since,
        until=args.until,
        related_activities=args.related_activities,
        related_agents=args.related_agents,
        limit=args.limit,
        descending=args.descending or None,
        cursor=args.cursor,
    )
    with _get_client(settings) as xapi:
        page = xapi.get_statements(query)
    _print_json(page)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xapi-lrs",
        description="Send and fetch xAPI statements",
    )
    parser.add_argument("--endpoint", default=None, help="LRS endpoint (or XAPI_ENDPOINT)")
    parser.add_argument("--username", default=None, help="LRS key (or XAPI_USERNAME)")
    parser.add_argument("--password", default=None, help="LRS secret (or XAPI_PASSWORD)")
    parser.add_argument("--actor", type=_json_arg, default=None, help="Default actor as JSON (or XAPI_ACTOR)")

    sub = parser.add_subparsers(dest="command")

    # send
    p = sub.add_parser("send", help="Send a statement")
    p.add_argument("--verb", type=_resolve_verb, required=True, help="Verb name or URI")
    p.add_argument("--object-id", required=True, help="Activity ID")
    p.add_argument("--result", type=_json_arg, default=None, help="Result as JSON")
    p.add_argument("--context", type=_json_arg, default=None, help="Context as JSON")

    # statements
    p = sub.add_parser("statements", help="Fetch a page of statements")
    p.add_argument("--agent", type=_agent_arg, default=None, help="Agent as JSON, or * for all")
    p.add_argument("--verb", default=None, help="Verb URI")
    p.add_argument("--activity", default=None, help="Activity ID")
    p.add_argument("--since", default=None)
    p.add_argument("--until", default=None)
    p.add_argument("--related-activities", type=_bool_arg, default=None)
    p.add_argument("--related-agents", type=_bool_arg, default=None)
    p.add_argument("--limit", type=int, default=None)
    p.add_argument("--descending", action="store_true")
    p.add_argument("--cursor", default=None, help="'more' URL from a previous page")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    handlers = {
        "send": cmd_send,
        "statements": cmd_statements,
    }
    try:
        settings = _settings(args)
        setup_logging(settings)
        handlers[args.command](args, settings)
    except ConfigurationError as exc:
        print(f"Error: {exc} (set it with --{exc.field} or XAPI_{exc.field.upper()})", file=sys.stderr)
        sys.exit(1)
    except (XAPIError, TransportError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
