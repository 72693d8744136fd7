"""Test configuration and fixtures."""

from __future__ import annotations

import json
import threading
from collections.abc import Iterator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs, urlsplit

import pytest

PROJECTS: list[dict[str, str]] = [
    {"id": "102", "key": "PC", "name": "ProjectC"},
    {"id": "100", "key": "PA", "name": "ProjectA"},
    {"id": "101", "key": "PB", "name": "ProjectB"},
]


def _issue_fields(
    summary: str,
    assignee: str | None,
    reporter: str,
    status: str,
    labels: list[str],
    created: str,
) -> dict[str, Any]:
    return {
        "summary": summary,
        "description": f"{summary} description",
        "labels": labels,
        "assignee": (
            None
            if assignee is None
            else {
                "name": assignee,
                "emailAddress": f"{assignee}@jira.com",
                "self": f"https://jira.com/{assignee}",
            }
        ),
        "reporter": {
            "name": reporter,
            "emailAddress": f"{reporter}@jira.com",
            "self": f"https://jira.com/{reporter}",
        },
        "status": {"name": status, "description": f"{status} ticket"},
        "created": created,
        "updated": created,
    }


# Issues per project id, deliberately not in creation order.
ISSUES: dict[str, list[dict[str, Any]]] = {
    "100": [
        {
            "key": "PA-1",
            "fields": _issue_fields(
                "Some ProjectA issue", "userA", "userB", "Open", ["labelA"],
                "2015-03-05T16:54:07.000+0000",
            ),
        },
    ],
    "101": [
        {
            "key": "PB-2",
            "fields": _issue_fields(
                "Second ProjectB issue", None, "userA", "Open", [],
                "2015-03-06T16:54:07.000+0000",
            ),
        },
        {
            "key": "PB-1",
            "fields": _issue_fields(
                "Some ProjectB issue", "userB", "userA", "In Progress", ["labelB1", "labelB2"],
                "2015-03-01T16:54:07.000+0000",
            ),
        },
    ],
    "102": [],
}


class StubJira:
    """Handle to a running stub server."""

    def __init__(self, server: ThreadingHTTPServer) -> None:
        self._server = server
        self.requests: list[dict[str, Any]] = []

    @property
    def url(self) -> str:
        host, port = self._server.server_address[:2]
        return f"http://{host}:{port}/rest/api/2"

    @property
    def netloc(self) -> str:
        host, port = self._server.server_address[:2]
        return f"{host}:{port}"


def _make_handler(stub_box: list[StubJira], mode: str) -> type[BaseHTTPRequestHandler]:
    class Handler(BaseHTTPRequestHandler):
        def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
            pass

        def _send(self, status: int, body: str) -> None:
            encoded = body.encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(encoded)))
            self.end_headers()
            self.wfile.write(encoded)

        def do_GET(self) -> None:  # noqa: N802
            parts = urlsplit(self.path)
            stub_box[0].requests.append(
                {
                    "path": parts.path,
                    "query": parse_qs(parts.query),
                    "authorization": self.headers.get("Authorization"),
                }
            )

            if mode == "not_found":
                self._send(404, json.dumps({"errorMessages": ["not found"]}))
                return
            if mode == "broken_json":
                self._send(200, "{")
                return
            if mode == "broken_search" and parts.path.endswith("/search"):
                self._send(200, "{")
                return

            if parts.path.endswith("/project"):
                self._send(200, json.dumps(PROJECTS))
                return

            if parts.path.endswith("/search"):
                jql = parse_qs(parts.query).get("jql", [""])[0]
                if not jql.startswith("project="):
                    self._send(400, json.dumps({"errorMessages": [f"bad jql {jql!r}"]}))
                    return
                project_id = jql.removeprefix("project=")
                if project_id not in ISSUES:
                    self._send(404, json.dumps({"errorMessages": ["no such project found"]}))
                    return
                issues = ISSUES[project_id]
                self._send(200, json.dumps({"total": len(issues), "issues": issues}))
                return

            self._send(404, json.dumps({"errorMessages": ["unknown path"]}))

    return Handler


def _serve(mode: str) -> Iterator[StubJira]:
    stub_box: list[StubJira] = []
    server = ThreadingHTTPServer(("127.0.0.1", 0), _make_handler(stub_box, mode))
    stub_box.append(StubJira(server))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield stub_box[0]
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture
def stub_jira() -> Iterator[StubJira]:
    """A stub Jira serving /project and /search."""
    yield from _serve("ok")


@pytest.fixture
def not_found_jira() -> Iterator[StubJira]:
    """A stub Jira that answers 404 to everything."""
    yield from _serve("not_found")


@pytest.fixture
def broken_json_jira() -> Iterator[StubJira]:
    """A stub Jira that answers every request with truncated JSON."""
    yield from _serve("broken_json")


@pytest.fixture
def broken_search_jira() -> Iterator[StubJira]:
    """A stub Jira with a working /project but truncated JSON from /search."""
    yield from _serve("broken_search")


@pytest.fixture
def jira_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> pytest.MonkeyPatch:
    """Isolate settings from the developer's environment and .env file."""
    for name in (
        "JIRA_USER",
        "JIRAUSER",
        "JIRA_PASSWORD",
        "JIRAPASS",
        "JIRA_URL",
        "JIRAURL",
        "JIRA_TIMEOUT",
        "LOG_LEVEL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture(autouse=True)
def _no_proxies(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep requests to the local stub server off any configured proxy."""
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
