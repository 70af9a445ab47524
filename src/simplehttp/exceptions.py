r"""Define the exceptions raised by the simple HTTP client."""

from __future__ import annotations

__all__ = ["DeserializationError", "RequestTimeoutError", "SimpleHttpError"]

from typing import Any


class SimpleHttpError(Exception):
    """Base class of all the errors raised by ``simplehttp``."""


class RequestTimeoutError(SimpleHttpError, TimeoutError):
    r"""Raised when a request does not complete within its timeout.

    The timeout covers both sending the request and reading the whole
    response body. It is distinct from the transport errors raised by
    ``httpx`` (connection refused, DNS failure, ...), which are
    propagated unchanged.

    Args:
        method: The HTTP method of the request that timed out.
        url: The URL of the request that timed out.
        timeout: The timeout budget in seconds that was exceeded.

    Example:
        ```pycon
        >>> from simplehttp.exceptions import RequestTimeoutError
        >>> error = RequestTimeoutError(method="GET", url="https://api.example.com", timeout=5)
        >>> error.timeout
        5
        >>> str(error)
        'GET request to https://api.example.com timed out after 5 seconds'

        ```
    """

    def __init__(self, method: str, url: str, timeout: float) -> None:
        super().__init__(f"{method} request to {url} timed out after {timeout} seconds")
        self.method = method
        self.url = url
        self.timeout = timeout


class DeserializationError(SimpleHttpError, ValueError):
    r"""Raised when a serializer cannot decode data into the requested
    type.

    Args:
        message: The error message.
        type_: The type the data was decoded into.
        data: The text that failed to decode.
    """

    def __init__(self, message: str, type_: Any = None, data: str | None = None) -> None:
        super().__init__(message)
        self.type_ = type_
        self.data = data
