"""Connection settings and per-call response options."""

import os
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, replace
from enum import StrEnum

import httpx

from promapi.errors import UnexpectedContentLevel


def _env_timeout() -> float | None:
    raw = os.getenv("PROMETHEUS_HTTP_TIMEOUT", "30")
    return float(raw) if raw else None


@dataclass(frozen=True)
class Connection:
    # Base URL of the Prometheus instance, without the API prefix
    url: str
    # Overridable e.g. when going through a reverse proxy
    api_prefix: str = field(
        default_factory=lambda: os.getenv("PROMETHEUS_API_PREFIX", "/api/v1")
    )
    # Handed to httpx; promapi itself enforces no timeout
    http_timeout: float | None = field(default_factory=_env_timeout)
    transport: httpx.BaseTransport | None = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "url", self.url.rstrip("/"))


def load_connection() -> Connection:
    """Build a connection from PROMETHEUS_URL and the other PROMETHEUS_* variables."""
    return Connection(url=os.getenv("PROMETHEUS_URL", "http://localhost:9090"))


class ContentLevel(StrEnum):
    """How much of a response is handed back to the caller.

    - HTTP_CLIENT: the raw ``httpx.Response``, good for debugging
    - BODY: the parsed JSON body
    - DATA: the "data" part of the body
    - BEST: only the most sensible data for each endpoint (default)
    """

    HTTP_CLIENT = "http-client"
    BODY = "body"
    DATA = "data"
    BEST = "best"


@dataclass(frozen=True)
class Options:
    content_level: ContentLevel = ContentLevel.BEST
    # Convert time series into {datetime: value} mappings. Ignored for HTTP_CLIENT.
    convert_result: bool = True


def load_options() -> Options:
    """Build default options from PROMETHEUS_CONTENT_LEVEL / PROMETHEUS_CONVERT_RESULT."""
    level = os.getenv("PROMETHEUS_CONTENT_LEVEL", ContentLevel.BEST.value)
    try:
        content_level = ContentLevel(level.lower())
    except ValueError:
        raise UnexpectedContentLevel(level) from None
    convert_result = os.getenv("PROMETHEUS_CONVERT_RESULT", "true").lower() not in ("0", "false", "no")
    return Options(content_level=content_level, convert_result=convert_result)


_current_options: ContextVar[Options | None] = ContextVar("promapi_options", default=None)


def current_options() -> Options:
    value = _current_options.get()
    if value is None:
        return load_options()
    return value


@contextmanager
def options(content_level: ContentLevel | None = None, convert_result: bool | None = None):
    """Override response options for the enclosed block.

    The override lives in a context variable, so it only applies to the
    current thread or asyncio task and is undone on exit.

        with options(content_level=ContentLevel.BODY):
            body = client.query(conn, "up")
    """
    changes = {}
    if content_level is not None:
        changes["content_level"] = content_level
    if convert_result is not None:
        changes["convert_result"] = convert_result

    token = _current_options.set(replace(current_options(), **changes))
    try:
        yield _current_options.get()
    finally:
        _current_options.reset(token)
