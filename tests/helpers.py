r"""Shared test helpers for simplehttp tests.

This module provides fake transports built on ``httpx.MockTransport``
so that the client can be exercised without network access.
"""

from __future__ import annotations

__all__ = [
    "TEST_HOST",
    "echo_handler",
    "echoed",
    "make_client",
    "make_transport_factory",
    "never_responding_handler",
    "status_handler",
]

import asyncio
import json
from typing import TYPE_CHECKING, Any

import httpx

from simplehttp import SimpleClient

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

TEST_HOST = "https://api.example.com"


def echo_handler(request: httpx.Request) -> httpx.Response:
    """Echo the received request as a JSON document.

    The document has the shape of the postman-echo service: ``method``,
    ``url``, ``args`` (query parameters), ``headers`` (lower-cased
    names), ``data`` (the raw body as text) and ``form`` (decoded form
    fields).
    """
    body = request.content.decode("utf-8")
    form: dict[str, Any] = {}
    if request.headers.get("content-type", "").startswith("application/x-www-form-urlencoded"):
        form = dict(httpx.QueryParams(body))
    document = {
        "method": request.method,
        "url": str(request.url),
        "args": dict(request.url.params),
        "headers": dict(request.headers),
        "data": body,
        "form": form,
    }
    return httpx.Response(200, json=document)


def status_handler(status_code: int, **kwargs: Any) -> Callable[[httpx.Request], httpx.Response]:
    """Create a handler that always answers with the given status."""

    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        return httpx.Response(status_code, **kwargs)

    return handler


async def never_responding_handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
    """A handler that never answers."""
    await asyncio.Event().wait()
    msg = "unreachable"  # pragma: no cover
    raise AssertionError(msg)  # pragma: no cover


def make_transport_factory(
    handler: Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]],
) -> Callable[[], httpx.AsyncClient]:
    """Create a transport factory sharing one mocked
    ``httpx.AsyncClient``."""
    transport = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return lambda: transport


def make_client(
    handler: Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]] = echo_handler,
    host: str | None = TEST_HOST,
    **kwargs: Any,
) -> SimpleClient:
    """Create a ``SimpleClient`` sending its requests to ``handler``."""
    return SimpleClient(host, transport_factory=make_transport_factory(handler), **kwargs)


def echoed(response_body: str | None) -> dict[str, Any]:
    """Parse the body of a response produced by ``echo_handler``."""
    return json.loads(response_body or "")
