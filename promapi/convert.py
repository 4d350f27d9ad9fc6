"""Reshape query results into timestamp-keyed mappings."""

from enum import StrEnum

from promapi.errors import UnexpectedResultType
from promapi.timestamps import prom_timestamp_to_datetime
from promapi.values import parse_sample_value


class ResultType(StrEnum):
    MATRIX = "matrix"
    VECTOR = "vector"
    SCALAR = "scalar"
    STRING = "string"


def maybe_convert_result_in_body(body: dict, has_result: bool, convert_result: bool) -> dict:
    if has_result and convert_result:
        return convert_result_in_body(body)
    return body


def convert_result_in_body(body: dict) -> dict:
    """Replace ``data.result`` of a query response body with its converted form.

    The body is updated in place and returned. Every other field is left alone.
    """
    data = body.get("data", {})
    data["result"] = convert_result_ts(data.get("result"), data.get("resultType"))
    return body


def convert_result_ts(result, result_type):
    """Convert a raw ``data.result`` according to its ``data.resultType``.

    - matrix: each series' ``values`` become ``{datetime: value}``
    - vector: each series' ``value`` becomes a single-entry ``{datetime: value}``
    - scalar: the point itself becomes a single-entry mapping
    - string: same as scalar, but the string is kept verbatim

    Raises:
        UnexpectedResultType: for any other result type.
    """
    try:
        result_type = ResultType(result_type)
    except ValueError:
        raise UnexpectedResultType(result_type) from None

    if result_type is ResultType.MATRIX:
        return [_convert_field(series, "values", normalize_points) for series in result]
    elif result_type is ResultType.VECTOR:
        return [_convert_field(series, "value", normalize_point) for series in result]
    elif result_type is ResultType.SCALAR:
        return normalize_point(result)
    elif result_type is ResultType.STRING:
        return normalize_string(result)
    else:
        raise UnexpectedResultType(result_type)


def _convert_field(series: dict, key: str, normalize) -> dict:
    # Native histogram series carry "histograms" / "histogram" instead; leave them as-is.
    if key not in series:
        return series
    return {**series, key: normalize(series[key])}


def normalize_string(point) -> dict:
    ts, s = point
    return {prom_timestamp_to_datetime(ts): s}


def normalize_point(point) -> dict:
    ts, v = point
    return {prom_timestamp_to_datetime(ts): parse_sample_value(v)}


def normalize_points(points) -> dict:
    # Later points win on duplicate timestamps.
    converted = {}
    for point in points:
        converted.update(normalize_point(point))
    return converted
