"""Tests for connection settings and scoped options."""

import threading

import pytest

from promapi.config import (
    Connection,
    ContentLevel,
    Options,
    current_options,
    load_connection,
    load_options,
    options,
)
from promapi.errors import UnexpectedContentLevel, UnexpectedVerbosityLevel


def test_connection_defaults():
    conn = load_connection()
    assert conn.url == "http://localhost:9090"
    assert conn.api_prefix == "/api/v1"
    assert conn.http_timeout == 30.0
    assert conn.transport is None


def test_connection_from_env(monkeypatch):
    monkeypatch.setenv("PROMETHEUS_URL", "https://prom.example.com/")
    monkeypatch.setenv("PROMETHEUS_API_PREFIX", "/prometheus/api/v1")
    monkeypatch.setenv("PROMETHEUS_HTTP_TIMEOUT", "")
    conn = load_connection()
    assert conn.url == "https://prom.example.com"
    assert conn.api_prefix == "/prometheus/api/v1"
    assert conn.http_timeout is None


def test_connection_requires_a_url():
    with pytest.raises(TypeError):
        Connection()


def test_connection_is_immutable():
    conn = Connection(url="http://localhost:9090")
    with pytest.raises(AttributeError):
        conn.url = "http://elsewhere:9090"


def test_default_options():
    assert current_options() == Options(ContentLevel.BEST, True)


def test_options_from_env(monkeypatch):
    monkeypatch.setenv("PROMETHEUS_CONTENT_LEVEL", "DATA")
    monkeypatch.setenv("PROMETHEUS_CONVERT_RESULT", "false")
    assert load_options() == Options(ContentLevel.DATA, False)


def test_unknown_content_level_in_env(monkeypatch):
    monkeypatch.setenv("PROMETHEUS_CONTENT_LEVEL", "everything")
    with pytest.raises(UnexpectedContentLevel):
        load_options()


def test_options_override_is_restored():
    with options(content_level=ContentLevel.BODY) as opts:
        assert opts == Options(ContentLevel.BODY, True)
        with options(convert_result=False):
            assert current_options() == Options(ContentLevel.BODY, False)
        assert current_options() == Options(ContentLevel.BODY, True)
    assert current_options() == Options(ContentLevel.BEST, True)


def test_options_override_is_restored_on_error():
    with pytest.raises(RuntimeError):
        with options(content_level=ContentLevel.DATA):
            raise RuntimeError("boom")
    assert current_options().content_level == ContentLevel.BEST


def test_options_do_not_leak_across_threads():
    barrier = threading.Barrier(2, timeout=5)
    seen = {}

    def worker(level):
        with options(content_level=level):
            barrier.wait()
            seen[level] = current_options().content_level
            barrier.wait()

    threads = [threading.Thread(target=worker, args=(lvl,)) for lvl in (ContentLevel.BODY, ContentLevel.DATA)]
    for th in threads:
        th.start()
    for th in threads:
        th.join()

    assert seen == {ContentLevel.BODY: ContentLevel.BODY, ContentLevel.DATA: ContentLevel.DATA}
    assert current_options().content_level == ContentLevel.BEST


def test_verbosity_level_alias(monkeypatch):
    monkeypatch.setenv("PROMETHEUS_CONTENT_LEVEL", "loud")
    with pytest.raises(UnexpectedVerbosityLevel) as excinfo:
        load_options()
    assert excinfo.value.content_level == "loud"
