"""Client for the Prometheus HTTP API.

Every function takes a ``Connection`` as first argument:

    conn = Connection(url="http://localhost:9090")
    client.query(conn, "up")

What gets returned depends on the current ``Options`` (see ``promapi.config.options``).
Time-valued arguments accept datetimes, epoch seconds or RFC 3339 strings.

See https://prometheus.io/docs/prometheus/latest/querying/api/
"""

import logging
from urllib.parse import quote

from promapi.config import Connection, ContentLevel, current_options, options
from promapi.http import (
    http_get_and_maybe_parse_data,
    http_get_and_maybe_parse_ts_result,
    http_post_and_maybe_parse_data,
)
from promapi.timestamps import normalize_inst

log = logging.getLogger("promapi.client")


def _matchers(series_matchers: str | list[str] | None) -> list[str] | None:
    if isinstance(series_matchers, str):
        return [series_matchers]
    return series_matchers


# --- Query: data ---


def query(conn: Connection, q: str, *, at=None, timeout: str | None = None):
    """Evaluate ``q`` at the instant ``at`` (last data point when omitted).

    Use ``query_range`` to query over a time range.
    """
    return http_get_and_maybe_parse_ts_result(
        conn,
        "/query",
        {"query": q, "time": normalize_inst(at), "timeout": timeout},
    )


def query_range(conn: Connection, q: str, start, end, step, *, timeout: str | None = None):
    """Evaluate ``q`` from ``start`` to ``end``, with ``step`` between points.

    Args:
        step: duration string (e.g. "5m") or float number of seconds.
        timeout: evaluation timeout, forwarded to the server.
    """
    return http_get_and_maybe_parse_ts_result(
        conn,
        "/query_range",
        {
            "query": q,
            "start": normalize_inst(start),
            "end": normalize_inst(end),
            "step": step,
            "timeout": timeout,
        },
    )


# --- Query: metadata ---


def series(conn: Connection, series_matchers: str | list[str], *, start=None, end=None):
    """Find series matching any of ``series_matchers``, optionally within a time range."""
    return http_get_and_maybe_parse_data(
        conn,
        "/series",
        {
            "match[]": _matchers(series_matchers),
            "start": normalize_inst(start),
            "end": normalize_inst(end),
        },
    )


def labels(conn: Connection, *, start=None, end=None, series_matchers: str | list[str] | None = None):
    """List label names, optionally restricted to a time range and to some series."""
    return http_get_and_maybe_parse_data(
        conn,
        "/labels",
        {
            "start": normalize_inst(start),
            "end": normalize_inst(end),
            "match[]": _matchers(series_matchers),
        },
    )


def values_for_label(
    conn: Connection,
    label: str,
    *,
    start=None,
    end=None,
    series_matchers: str | list[str] | None = None,
):
    """List the values of the label name ``label``.

    The name is percent-encoded into the path, so UTF-8 label names work too.
    """
    return http_get_and_maybe_parse_data(
        conn,
        f"/label/{quote(label, safe='')}/values",
        {
            "start": normalize_inst(start),
            "end": normalize_inst(end),
            "match[]": _matchers(series_matchers),
        },
    )


# --- Target discovery ---


def targets(conn: Connection, *, state: str | None = None):
    """List scrape targets. ``state`` is one of "active", "dropped", "any"."""
    return http_get_and_maybe_parse_data(conn, "/targets", {"state": state})


def targets_metadata(
    conn: Connection,
    *,
    label_matcher: str | None = None,
    metric: str | None = None,
    limit: int | None = None,
):
    """Get metadata about metrics scraped from targets.

    Args:
        label_matcher: selects targets by their labels (``match_target``).
        metric: metric name to get metadata for.
        limit: maximum number of targets to match.
    """
    return http_get_and_maybe_parse_data(
        conn,
        "/targets/metadata",
        {"match_target": label_matcher, "metric": metric, "limit": limit},
    )


def metadata(conn: Connection, *, metric: str | None = None, limit: int | None = None):
    """Like ``targets_metadata``, without the target context."""
    return http_get_and_maybe_parse_data(conn, "/metadata", {"metric": metric, "limit": limit})


# --- Alerting & recording rules ---


def rules(conn: Connection, *, type: str | None = None):
    """List alerting and recording rules. ``type`` is "alert" or "record"."""
    return http_get_and_maybe_parse_data(conn, "/rules", {"type": type})


def alerts(conn: Connection):
    return http_get_and_maybe_parse_data(conn, "/alerts")


def alertmanagers(conn: Connection):
    return http_get_and_maybe_parse_data(conn, "/alertmanagers")


# --- Status ---


def config(conn: Connection):
    """Get the currently loaded configuration file (YAML, under "yaml")."""
    return http_get_and_maybe_parse_data(conn, "/status/config")


def flags(conn: Connection):
    return http_get_and_maybe_parse_data(conn, "/status/flags")


def build_information(conn: Connection):
    return http_get_and_maybe_parse_data(conn, "/status/buildinfo")


def tsdb_stats(conn: Connection):
    """Get cardinality stats about the TSDB."""
    return http_get_and_maybe_parse_data(conn, "/status/tsdb")


# --- TSDB admin ---


def snapshot(conn: Connection, *, skip_head: bool | None = None):
    """Snapshot current data into snapshots/<datetime>-<rand> under the TSDB data directory.

    With ``skip_head``, data only present in the head block is left out.
    Returns the snapshot directory name for the BEST content level.
    """
    data = http_post_and_maybe_parse_data(conn, "/admin/tsdb/snapshot", {"skip_head": skip_head})
    if current_options().content_level == ContentLevel.BEST:
        return data["name"]
    return data


def delete_series(conn: Connection, series_matchers: str | list[str], *, start=None, end=None) -> None:
    """Delete data for the matching series, optionally within a time range.

    Data stays on disk until the next compaction; ``clean_tombstones`` forces it.

    Raises:
        httpx.HTTPStatusError: the server refused the deletion.
    """
    with options(content_level=ContentLevel.HTTP_CLIENT):
        resp = http_post_and_maybe_parse_data(
            conn,
            "/admin/tsdb/delete_series",
            {
                "match[]": _matchers(series_matchers),
                "start": normalize_inst(start),
                "end": normalize_inst(end),
            },
        )
    _check_no_content(resp)


def clean_tombstones(conn: Connection) -> None:
    """Remove deleted data from disk and clean up existing tombstones.

    Raises:
        httpx.HTTPStatusError: the server refused the cleanup.
    """
    with options(content_level=ContentLevel.HTTP_CLIENT):
        resp = http_post_and_maybe_parse_data(conn, "/admin/tsdb/clean_tombstones")
    _check_no_content(resp)


def _check_no_content(resp) -> None:
    # Admin endpoints answer 204 on success; other failures already raised.
    if resp.status_code != 204:
        log.warning("%s answered %d, expected 204", resp.request.url, resp.status_code)
