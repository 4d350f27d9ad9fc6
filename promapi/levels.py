"""Pick the part of a response to hand back, depending on the content level."""

import httpx

from promapi.config import ContentLevel
from promapi.convert import maybe_convert_result_in_body
from promapi.errors import UnexpectedContentLevel


def select(
    response: httpx.Response,
    content_level: ContentLevel,
    has_result: bool,
    convert_result: bool = True,
):
    """Extract the payload of ``response`` for ``content_level``.

    Args:
        has_result: the endpoint answers with ``data.resultType`` / ``data.result``.
        convert_result: apply the time series conversion to the result.

    Returns:
        The response itself for HTTP_CLIENT, otherwise the full body, its
        ``data`` field, or for BEST ``data.result`` when the endpoint has one.
    """
    if content_level == ContentLevel.HTTP_CLIENT:
        return response

    if content_level not in (ContentLevel.BODY, ContentLevel.DATA, ContentLevel.BEST):
        raise UnexpectedContentLevel(content_level)

    body = maybe_convert_result_in_body(response.json(), has_result, convert_result)

    if content_level == ContentLevel.BODY:
        return body
    elif content_level == ContentLevel.DATA:
        return body.get("data")
    elif has_result:
        return body["data"]["result"]
    else:
        return body.get("data")
