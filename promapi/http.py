"""Issue requests against the Prometheus HTTP API."""

import logging

import httpx

from promapi.config import Connection, current_options
from promapi.levels import select

log = logging.getLogger("promapi.http")


def with_only_non_nil(params: dict | None) -> dict:
    """Drop parameters set to None: Prometheus treats an empty value differently from a missing one."""
    return {k: v for k, v in (params or {}).items() if v is not None}


def request_and_maybe_parse(
    conn: Connection,
    method: str,
    endpoint: str,
    params: dict | None = None,
    has_result: bool = False,
):
    """Send one request and shape the response according to the current options.

    GET requests carry ``params`` in the query string, POST requests as a form
    body. List values are sent as repeated keys (e.g. ``match[]``).

    Raises:
        httpx.HTTPStatusError: the server answered with a non-2xx status.
        httpx.HTTPError: the request itself failed.
    """
    url = f"{conn.url}{conn.api_prefix}{endpoint}"
    params = with_only_non_nil(params)
    opts = current_options()

    log.debug("%s %s params=%s", method, url, sorted(params))
    with httpx.Client(timeout=conn.http_timeout, transport=conn.transport) as client:
        if method == "GET":
            resp = client.get(url, params=params, headers={"Accept": "application/json"})
        elif method == "POST":
            resp = client.post(url, data=params, headers={"Accept": "application/json"})
        else:
            raise ValueError(f"Unsupported HTTP method: {method}")
        log.debug("%s %s -> %d", method, url, resp.status_code)
        resp.raise_for_status()

    return select(resp, opts.content_level, has_result, opts.convert_result)


def http_get_and_maybe_parse_data(conn: Connection, endpoint: str, params: dict | None = None):
    return request_and_maybe_parse(conn, "GET", endpoint, params, has_result=False)


def http_post_and_maybe_parse_data(conn: Connection, endpoint: str, params: dict | None = None):
    return request_and_maybe_parse(conn, "POST", endpoint, params, has_result=False)


def http_get_and_maybe_parse_ts_result(conn: Connection, endpoint: str, params: dict | None = None):
    return request_and_maybe_parse(conn, "GET", endpoint, params, has_result=True)
