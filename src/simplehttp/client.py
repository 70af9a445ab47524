r"""Asynchronous client executing ``Request`` objects.

The ``SimpleClient`` resolves the URL of a request, assembles it, sends
it through a shared ``httpx.AsyncClient`` within the request timeout and
returns a normalized ``Response``. A single client is meant to be shared
by many concurrent tasks.
"""

from __future__ import annotations

__all__ = ["SimpleClient"]

import asyncio
import logging
from typing import TYPE_CHECKING, Any, TypeVar, overload

import httpx

from simplehttp.config import DEFAULT_TIMEOUT, NO_TIMEOUT
from simplehttp.core.assembly import build_request
from simplehttp.core.response import add_response_body, deserialize_body, populate_response
from simplehttp.core.transport import TransportManager
from simplehttp.core.url import build_url
from simplehttp.core.validation import validate_status_codes, validate_timeout
from simplehttp.exceptions import RequestTimeoutError
from simplehttp.models import Response, TypedResponse
from simplehttp.serialization import JsonSerializer
from simplehttp.utils.structured_logging import correlation_scope

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from types import TracebackType
    from typing import Self

    from simplehttp.core.transport import TransportFactory
    from simplehttp.logger import HttpLogger
    from simplehttp.models import Request
    from simplehttp.serialization import BaseSerializer

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class SimpleClient:
    r"""Asynchronous HTTP client sending ``Request`` objects.

    The configuration attributes (``host``, ``default_headers``,
    ``timeout``, ``additional_successful_status_codes``, ``serializer``,
    ``logger``, ``on_request`` and ``on_response``) can be changed at any
    time. They are read without locking when a request starts, so a
    change made while requests are in flight applies to the next
    requests only, last write wins.

    Args:
        host: The base URL of every request. If ``None``, the request
            paths (or URL overrides) must be full URLs.
        transport_factory: An optional callable returning the
            ``httpx.AsyncClient`` used to send a request, for instance to
            share a connection pool managed elsewhere. Transports
            returned by the factory are never closed by this client. If
            ``None``, the client creates its own transport and replaces
            it every 5 minutes.
        serializer: The serializer of request and response bodies.
            Defaults to ``JsonSerializer``.
        logger: An optional ``HttpLogger`` called before each request is
            sent and after each response is received.
        timeout: Timeout in seconds of every request, covering the send
            and the whole body read. ``-1`` disables it.
        default_headers: Headers sent with every request. Request
            headers with the same name (case-insensitive) win.
        additional_successful_status_codes: Status codes considered
            successful for every request in addition to 200-299.
        on_request: An optional callable called with the URL and the
            request right before it is sent.
        on_response: An optional callable called with the response right
            after it is received.

    Example:
        ```pycon
        >>> import asyncio
        >>> from simplehttp import Request, SimpleClient
        >>> async def main():  # doctest: +SKIP
        ...     async with SimpleClient("https://postman-echo.com") as client:
        ...         response = await client.make_request(Request("/get?param1=value1"))
        ...         print(response.status_code, response.is_successful)
        ...
        >>> asyncio.run(main())  # doctest: +SKIP
        200 True

        ```
    """

    def __init__(
        self,
        host: str | None = None,
        *,
        transport_factory: TransportFactory | None = None,
        serializer: BaseSerializer | None = None,
        logger: HttpLogger | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        default_headers: Mapping[str, str] | None = None,
        additional_successful_status_codes: Iterable[int] | None = None,
        on_request: Callable[[str, Request], None] | None = None,
        on_response: Callable[[Response], None] | None = None,
    ) -> None:
        self.host = host
        self.serializer = serializer if serializer is not None else JsonSerializer()
        self.logger = logger
        self.timeout = timeout
        self.default_headers = httpx.Headers(default_headers)
        self.additional_successful_status_codes = set(additional_successful_status_codes or ())
        validate_status_codes(self.additional_successful_status_codes)
        self.on_request = on_request
        self.on_response = on_response

        self._transports = TransportManager(transport_factory)

    @property
    def timeout(self) -> float:
        r"""The timeout in seconds of every request, ``-1`` if
        disabled."""
        return self._timeout

    @timeout.setter
    def timeout(self, timeout: float) -> None:
        validate_timeout(timeout)
        self._timeout = timeout

    @property
    def transports(self) -> TransportManager:
        r"""The manager providing the transport of each request."""
        return self._transports

    @property
    def is_closed(self) -> bool:
        return self._transports.is_closed

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        r"""Stop the transport replacement and close the owned transport.

        Calling this method more than once is safe.
        """
        await self._transports.aclose()

    def get_url(self, request: Request) -> str:
        r"""Get the URL a request is sent to by this client.

        Args:
            request: The request.

        Returns:
            The URL.
        """
        return build_url(self.host, request)

    @overload
    async def make_request(self, request: Request) -> Response: ...

    @overload
    async def make_request(self, request: Request, response_type: type[T]) -> TypedResponse[T]: ...

    async def make_request(self, request: Request, response_type: Any = None) -> Response:
        r"""Send a request and return its response.

        A response with a non-successful status code is returned
        normally, with ``is_successful`` set to ``False``.

        Args:
            request: The request to send.
            response_type: An optional type to decode the response body
                into. When provided a ``TypedResponse`` is returned and
                decoding errors are stored in its
                ``deserialization_error`` instead of being raised.

        Returns:
            The response. Its ``id`` is the ``id`` of the request.

        Raises:
            RequestTimeoutError: If the request does not complete within
                the effective timeout.
            httpx.TransportError: If the transport fails to send the
                request (connection refused, DNS failure, ...).
            RuntimeError: If the client is closed.
        """
        if response_type is None:
            response: Response = Response(id=request.id)
        else:
            response = TypedResponse(id=request.id)
        with correlation_scope(request.id):
            return await self._execute(request, response, response_type)

    async def _execute(self, request: Request, response: Response, response_type: Any) -> Response:
        timeout = request.timeout_override if request.timeout_override is not None else self.timeout
        success_codes = self.additional_successful_status_codes | request.additional_successful_status_codes
        serializer = request.serializer_override or self.serializer

        url = self.get_url(request)
        http_request = build_request(
            request, url=url, default_headers=self.default_headers, serializer=serializer
        )

        if self.logger is not None:
            self.logger.log_request(url, request)
        if self.on_request is not None:
            self.on_request(url, request)

        logger.debug(f"Sending {request.method} request to {url} (timeout={timeout})")
        async with self._transports.lease() as transport:
            try:
                async with asyncio.timeout(None if timeout == NO_TIMEOUT else timeout) as scope:
                    http_response = await transport.send(http_request, stream=True)
                    try:
                        content = await http_response.aread()
                    finally:
                        await http_response.aclose()
            except TimeoutError as exc:
                if not scope.expired():
                    raise
                logger.debug(f"{request.method} request to {url} timed out after {timeout} seconds")
                raise RequestTimeoutError(method=request.method, url=url, timeout=timeout) from exc

        populate_response(http_response, response, success_codes)
        add_response_body(response, content, http_response.charset_encoding)
        if isinstance(response, TypedResponse):
            deserialize_body(response, serializer, response_type)
        logger.debug(
            f"{request.method} request to {url} completed with status {response.status_code}"
        )

        if self.logger is not None:
            self.logger.log_response(response)
        if self.on_response is not None:
            self.on_response(response)
        return response
