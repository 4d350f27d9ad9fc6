"""Shared test fixtures for promapi."""

import json
from urllib.parse import parse_qsl

import httpx
import pytest

from promapi.config import Connection


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "PROMETHEUS_URL",
        "PROMETHEUS_API_PREFIX",
        "PROMETHEUS_HTTP_TIMEOUT",
        "PROMETHEUS_CONTENT_LEVEL",
        "PROMETHEUS_CONVERT_RESULT",
    ):
        monkeypatch.delenv(name, raising=False)


class FakePrometheus:
    """Answers every request with a canned response and records what was sent."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: object = {"status": "success", "data": {}}

    def reply(self, body=None, status_code: int = 200):
        self.body = body
        self.status_code = status_code

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status_code, request=request)
        return httpx.Response(
            self.status_code,
            headers={"content-type": "application/json"},
            content=json.dumps(self.body).encode("utf-8"),
            request=request,
        )

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_form(self) -> list[tuple[str, str]]:
        return parse_qsl(self.last.content.decode("utf-8"))


@pytest.fixture
def prom() -> FakePrometheus:
    return FakePrometheus()


@pytest.fixture
def conn(prom: FakePrometheus) -> Connection:
    return Connection(
        url="http://prometheus.test:9090/",
        transport=httpx.MockTransport(prom.handler),
    )
