"""Convert instants to and from the epoch-seconds form used on the wire."""

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def normalize_inst(value):
    """Prepare a time-valued parameter for the query string.

    Datetimes become fractional epoch seconds (millisecond precision). Naive
    datetimes are taken as UTC. Numbers and strings (epoch seconds or RFC 3339)
    are accepted as-is by Prometheus, so they pass through, as does ``None``.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        millis = (value - EPOCH) // timedelta(milliseconds=1)
        return float(millis / 1000)
    return value


def prom_timestamp_to_datetime(ts) -> datetime:
    """Turn a sample timestamp (epoch seconds, possibly fractional) into an aware UTC datetime."""
    millis = round(float(ts) * 1000)
    return EPOCH + timedelta(milliseconds=millis)
