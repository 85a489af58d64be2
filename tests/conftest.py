"""Shared fixtures for wpro-publish tests."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
import pytest
from rich.logging import RichHandler

from wpro_publish.config import Settings

API_URL = "http://api.test"
TOKEN = "secret-token-1234"
PROTOTYPE_URL = f"{API_URL}/rest/org/groups/PAGE_COMPONENT_PROTOTYPE/"
SERVICE_URL = f"{API_URL}/rest/org/groups/service_pages/publish"

CONNECT_ERROR = "connect-error"


@dataclass
class FakeApi:
    """Records requests and answers them from a (method, url) -> status table.

    Unlisted routes answer 404. ``CONNECT_ERROR`` simulates a transport failure
    and an ``httpx.Response`` value is returned as-is.
    """

    routes: dict[tuple[str, str], Any] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.routes.get((request.method, str(request.url)), 404)
        if isinstance(outcome, httpx.Response):
            return outcome
        if outcome == CONNECT_ERROR:
            raise httpx.ConnectError("connection refused", request=request)
        if outcome == 204 or outcome >= 400:
            return httpx.Response(outcome)
        return httpx.Response(outcome, json={"status": "ok"})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, str(r.url)) for r in self.requests]

    def body(self, index: int) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Run each test without WPRO_* variables or a stray .env file."""
    for key in list(os.environ):
        if key.startswith("WPRO_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo root logger changes made by the CLI's logging setup."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, (RichHandler, logging.FileHandler)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(logging.NOTSET)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_url=API_URL, org="acme", token=TOKEN)


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def component_file(tmp_path: Path) -> Path:
    path = tmp_path / "component.yaml"
    path.write_text("groupId: g1\nsettings:\n  a: 1\n", encoding="utf-8")
    return path
