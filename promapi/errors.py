"""Exceptions raised by the Prometheus API client.

Transport failures (connection errors, timeouts, non-2xx statuses) are not
wrapped here: they surface as the ``httpx`` exceptions raised by the request.

``UnexpectedContentLevel`` is also exported as ``UnexpectedVerbosityLevel``.
"""


class PrometheusAPIError(Exception):
    """Base class for errors raised by promapi itself."""


class UnexpectedResultType(PrometheusAPIError):
    """The server answered with a ``data.resultType`` this client can't convert."""

    def __init__(self, result_type):
        self.result_type = result_type
        super().__init__(f'Unexpected "data.resultType" in HTTP body: {result_type!r}')


class UnexpectedContentLevel(PrometheusAPIError):
    """The configured content level is not one of ``ContentLevel``."""

    def __init__(self, content_level):
        self.content_level = content_level
        super().__init__(f"Unexpected content level: {content_level!r}")


UnexpectedVerbosityLevel = UnexpectedContentLevel


class SampleValueError(PrometheusAPIError, ValueError):
    """A sample value string is not a literal we know how to read."""

    def __init__(self, text):
        self.text = text
        super().__init__(f"Can't parse sample value: {text!r}")
