r"""Turn a ``Request`` into an ``httpx.Request`` ready to be sent.

Assembling a request merges the default headers of the client with the
request headers, resolves the effective content type, and resolves the
body according to a fixed precedence: form parameters, then the string
body, then the serialized ``body`` object.
"""

from __future__ import annotations

__all__ = ["build_request", "merge_headers"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

from simplehttp.config import (
    DEFAULT_CONTENT_TYPE,
    DEFAULT_USER_AGENT,
    FORM_URL_ENCODED_CONTENT_TYPE,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from simplehttp.models import Request
    from simplehttp.serialization import BaseSerializer

logger: logging.Logger = logging.getLogger(__name__)

CONTENT_TYPE_HEADER = "Content-Type"
USER_AGENT_HEADER = "User-Agent"


def merge_headers(
    request_headers: Mapping[str, str], default_headers: Mapping[str, str]
) -> httpx.Headers:
    r"""Merge request headers with default headers.

    Header names are compared case-insensitively and request headers
    win. A default ``User-Agent`` is added if neither side defines one.

    Args:
        request_headers: The headers of the request.
        default_headers: The default headers of the client.

    Returns:
        The merged headers.

    Example:
        ```pycon
        >>> from simplehttp.core.assembly import merge_headers
        >>> headers = merge_headers({"x-test": "b"}, {"X-Test": "a", "X-Other": "c"})
        >>> headers["X-Test"], headers["x-other"]
        ('b', 'c')
        >>> "user-agent" in headers
        True

        ```
    """
    headers = httpx.Headers(request_headers)
    for name, value in httpx.Headers(default_headers).items():
        if name not in headers:
            headers[name] = value
    if USER_AGENT_HEADER not in headers:
        headers[USER_AGENT_HEADER] = DEFAULT_USER_AGENT
    return headers


def _apply_content_type_header(request: Request, headers: httpx.Headers) -> httpx.Headers:
    r"""Remove the ``Content-Type`` header and use it as the request's
    content type if the latter was not customized."""
    if CONTENT_TYPE_HEADER not in headers:
        return headers
    if request.content_type == DEFAULT_CONTENT_TYPE:
        request.content_type = headers[CONTENT_TYPE_HEADER]
    del headers[CONTENT_TYPE_HEADER]
    return headers


def _text_content_type(request: Request) -> str:
    r"""Return the content type with the charset of the request, unless
    it already declares one."""
    params = request.content_type.split(";")[1:]
    if any(param.strip().lower().startswith("charset=") for param in params):
        return request.content_type
    return f"{request.content_type}; charset={request.content_encoding}"


def build_request(
    request: Request,
    *,
    url: str,
    default_headers: Mapping[str, str],
    serializer: BaseSerializer,
) -> httpx.Request:
    r"""Build the ``httpx.Request`` to send for a request.

    The body is chosen from the first non-empty source, in this order:

    1. ``form_url_encoded_parameters``, sent form url encoded. The
       request's content type is ignored.
    2. ``string_body``, sent as is with the request's content type and
       encoding.
    3. ``body``, serialized with ``request.serializer_override`` or
       ``serializer``. The serialized text is stored in
       ``request.string_body`` so that loggers see what was sent.

    Args:
        request: The request to assemble. Its ``content_type`` and
            ``string_body`` may be updated.
        url: The URL to send the request to.
        default_headers: The default headers of the client.
        serializer: The client's serializer.

    Returns:
        The request to send.
    """
    headers = _apply_content_type_header(
        request, merge_headers(request.headers, default_headers)
    )
    kwargs: dict[str, Any] = {}

    if request.form_url_encoded_parameters:
        logger.debug(f"{request.method} request to {url} uses a form url encoded body")
        headers[CONTENT_TYPE_HEADER] = FORM_URL_ENCODED_CONTENT_TYPE
        kwargs["data"] = request.form_url_encoded_parameters
    elif request.string_body:
        headers[CONTENT_TYPE_HEADER] = _text_content_type(request)
        kwargs["content"] = request.string_body.encode(request.content_encoding)
    elif request.body is not None:
        effective_serializer = request.serializer_override or serializer
        logger.debug(
            f"{request.method} request to {url} serializes its body with "
            f"{type(effective_serializer).__name__}"
        )
        request.string_body = effective_serializer.serialize(request.body)
        headers[CONTENT_TYPE_HEADER] = _text_content_type(request)
        kwargs["content"] = request.string_body.encode(request.content_encoding)

    return httpx.Request(request.method, url, headers=headers, **kwargs)
