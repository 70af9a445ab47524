r"""Build the URL a request is sent to."""

from __future__ import annotations

__all__ = ["build_url", "combine_urls", "has_value"]

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from simplehttp.models import Request

_SLASHES = "/\\"


def has_value(value: str | None) -> bool:
    r"""Return ``True`` if a string is neither ``None``, empty, nor only
    whitespace."""
    return value is not None and bool(value.strip())


def combine_urls(base: str | None, path: str | None) -> str:
    r"""Combine a base URL and a path, handling slashes.

    If either side is blank the other side is returned unchanged.
    Otherwise trailing slashes of ``base`` and leading slashes of
    ``path`` are removed and the two are joined with a single ``/``.

    Args:
        base: The base URL, usually the client's host.
        path: The path, usually the request's path.

    Returns:
        The combined URL.

    Example:
        ```pycon
        >>> from simplehttp.core.url import combine_urls
        >>> combine_urls("https://api.example.com/", "/users")
        'https://api.example.com/users'
        >>> combine_urls("https://api.example.com", "users")
        'https://api.example.com/users'
        >>> combine_urls(None, "https://api.example.com/users")
        'https://api.example.com/users'

        ```
    """
    if not has_value(base):
        return path or ""
    if not has_value(path):
        return base or ""
    return f"{base.rstrip(_SLASHES)}/{path.lstrip(_SLASHES)}"


def build_url(host: str | None, request: Request) -> str:
    r"""Build the URL a request is sent to.

    A non-blank ``request.url_override`` is used as is, otherwise the
    host and the request path are combined. The request's query string
    parameters are then merged into the query string of the URL: a
    parameter already present in the URL is overwritten, not repeated.
    Query parameters are applied whatever the HTTP method.

    Args:
        host: The client's host, or ``None``.
        request: The request to build the URL for.

    Returns:
        The URL.

    Example:
        ```pycon
        >>> from simplehttp import Request
        >>> from simplehttp.core.url import build_url
        >>> request = Request("/get?param1=old&param2=old")
        >>> request.query_string_parameters["param1"] = "new"
        >>> build_url("https://api.example.com", request)
        'https://api.example.com/get?param1=new&param2=old'

        ```
    """
    if has_value(request.url_override):
        url = request.url_override
    else:
        url = combine_urls(host, request.path)

    if not request.query_string_parameters:
        return url

    parsed = httpx.URL(url)
    for key, value in request.query_string_parameters.items():
        parsed = parsed.copy_set_param(key, value)
    return str(parsed)
