"""Tests for the xapi-lrs CLI."""

from __future__ import annotations

import json
from typing import List
from unittest.mock import patch

import httpx
import pytest

from xapi_lrs.cli import build_parser, main
from xapi_lrs.client import XAPI

ACTOR = {"mbox": "mailto:test@example.com"}


@pytest.fixture(autouse=True)
def env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XAPI_ENDPOINT", "https://example.com/xapi")
    monkeypatch.setenv("XAPI_USERNAME", "user")
    monkeypatch.setenv("XAPI_PASSWORD", "pass")
    monkeypatch.setenv("XAPI_ACTOR", json.dumps(ACTOR))


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("xapi_lrs.cli.setup_logging"):
        yield


def _patch_client(seen: List[httpx.Request], response: httpx.Response):
    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return response

    def make(settings):
        return XAPI(
            settings.endpoint, settings.username, settings.password, settings.actor,
            transport=httpx.MockTransport(record),
        )

    return patch("xapi_lrs.cli._get_client", side_effect=make)


class TestCLIParsing:
    def test_send_args_named_verb(self):
        args = build_parser().parse_args(["send", "--verb", "completed", "--object-id", "https://a/1"])
        assert args.command == "send"
        assert args.verb["id"] == "http://adlnet.gov/expapi/verbs/completed"
        assert args.object_id == "https://a/1"

    def test_send_args_verb_uri(self):
        args = build_parser().parse_args(["send", "--verb", "https://w3id.org/xapi/video/verbs/paused", "--object-id", "x"])
        assert args.verb == {"id": "https://w3id.org/xapi/video/verbs/paused"}

    def test_unknown_verb_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["send", "--verb", "flew", "--object-id", "x"])

    def test_statements_args(self):
        args = build_parser().parse_args([
            "statements", "--agent", "*", "--related-agents", "false", "--limit", "5", "--descending",
        ])
        assert args.agent == "*"
        assert args.related_agents is False
        assert args.related_activities is None
        assert args.limit == 5
        assert args.descending is True

    def test_global_overrides(self):
        args = build_parser().parse_args(["--endpoint", "https://o/xapi", "--actor", '{"mbox":"mailto:o@o"}', "statements"])
        assert args.endpoint == "https://o/xapi"
        assert args.actor == {"mbox": "mailto:o@o"}


class TestCLIIntegration:
    def test_send(self, capsys):
        seen: List[httpx.Request] = []
        with _patch_client(seen, httpx.Response(200, json=["stmt-1"])):
            main(["send", "--verb", "completed", "--object-id", "https://a/1", "--result", '{"completion": true}'])

        assert json.loads(capsys.readouterr().out) == ["stmt-1"]
        body = json.loads(seen[0].content)
        assert body["actor"] == ACTOR
        assert body["object"] == {"id": "https://a/1"}
        assert body["result"] == {"completion": True}
        assert "context" not in body

    def test_statements(self, capsys):
        seen: List[httpx.Request] = []
        page = {"statements": [{"id": "s1"}], "more": ""}
        with _patch_client(seen, httpx.Response(200, json=page)):
            main(["statements", "--limit", "1", "--related-agents", "false"])

        assert json.loads(capsys.readouterr().out) == page
        params = seen[0].url.params
        assert params["limit"] == "1"
        assert params["related_agents"] == "false"
        assert "descending" not in params

    def test_lrs_error_exits(self, capsys):
        seen: List[httpx.Request] = []
        with _patch_client(seen, httpx.Response(401, text="Unauthorized")):
            with pytest.raises(SystemExit) as exc_info:
                main(["statements"])
        assert exc_info.value.code == 1
        assert "xAPI fetch error 401: Unauthorized" in capsys.readouterr().err

    def test_actor_flag_wins_over_invalid_env_actor(self, monkeypatch, capsys):
        monkeypatch.setenv("XAPI_ACTOR", "{not json")
        seen: List[httpx.Request] = []
        with _patch_client(seen, httpx.Response(200, json=["stmt-1"])):
            main(["--actor", '{"mbox":"mailto:o@o"}', "send", "--verb", "completed", "--object-id", "https://a/1"])

        assert len(seen) == 1
        assert json.loads(seen[0].content)["actor"] == {"mbox": "mailto:o@o"}

    def test_invalid_env_actor_without_flag_exits(self, monkeypatch, capsys):
        monkeypatch.setenv("XAPI_ACTOR", "{not json")
        with pytest.raises(SystemExit) as exc_info:
            main(["statements"])
        assert exc_info.value.code == 1
        err = capsys.readouterr().err
        assert "Invalid actor JSON in XAPI_ACTOR" in err
        assert "Missing actor" not in err

    def test_missing_config_exits(self, monkeypatch, capsys):
        monkeypatch.delenv("XAPI_PASSWORD")
        with pytest.raises(SystemExit) as exc_info:
            main(["statements"])
        assert exc_info.value.code == 1
        assert "Missing password" in capsys.readouterr().err

    def test_no_command_prints_help(self):
        with pytest.raises(SystemExit):
            main([])
