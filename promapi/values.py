"""Parse sample value strings into Python numbers."""

import math
import re

from promapi.errors import SampleValueError

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

# Prometheus formats special floats with Go's strconv: "NaN", "+Inf", "-Inf".
_SPECIAL_FLOATS = {
    "nan": math.nan,
    "inf": math.inf,
    "+inf": math.inf,
    "-inf": -math.inf,
    "infinity": math.inf,
    "+infinity": math.inf,
    "-infinity": -math.inf,
}

_BOOLEANS = {"true": True, "false": False}


def parse_sample_value(text: str) -> int | float | bool:
    """Read the literal a sample value string denotes.

    Integers stay ``int``, decimals and exponent forms become ``float``, as do
    the NaN / infinity tokens. ``true`` and ``false`` are read as booleans.

    Raises:
        SampleValueError: the text is none of the above.
    """
    if not isinstance(text, str):
        raise SampleValueError(text)

    if _INT_RE.fullmatch(text):
        return int(text)
    if _FLOAT_RE.fullmatch(text):
        return float(text)

    lowered = text.lower()
    if lowered in _SPECIAL_FLOATS:
        return _SPECIAL_FLOATS[lowered]
    if lowered in _BOOLEANS:
        return _BOOLEANS[lowered]

    raise SampleValueError(text)
