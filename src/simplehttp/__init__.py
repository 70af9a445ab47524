r"""simplehttp - A simple asynchronous HTTP client wrapper.

Callers describe a request (path, method, headers, query parameters,
body) with ``Request``, send it with a ``SimpleClient`` and receive a
normalized ``Response`` with the status, headers, and string and byte
bodies. A response type can be requested to get a ``TypedResponse``
whose body is decoded with the client's serializer.

Key Features:
    - Host/path combination insensitive to leading and trailing slashes
    - Query string parameters merged into the URL, explicit ones win
    - Case-insensitive default headers and a default User-Agent
    - Form, string and serialized object bodies with a fixed precedence
    - Per-client and per-request timeouts raising ``RequestTimeoutError``
    - Configurable successful status codes
    - Best-effort body decoding that never hides the raw response
    - JSON (default) and XML serializers, pluggable request/response logger
    - Self-managed transport replaced periodically to refresh DNS

Example:
    ```pycon
    >>> import asyncio
    >>> from simplehttp import Request, SimpleClient
    >>> async def main():  # doctest: +SKIP
    ...     async with SimpleClient("https://postman-echo.com") as client:
    ...         request = Request("/post", "POST", body={"param1": "value1"})
    ...         response = await client.make_request(request, dict)
    ...         return response.body["data"]
    ...
    >>> asyncio.run(main())  # doctest: +SKIP
    {'param1': 'value1'}

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_TIMEOUT",
    "NO_TIMEOUT",
    "BaseSerializer",
    "DeserializationError",
    "HttpLogger",
    "JsonSerializer",
    "LoggingHttpLogger",
    "Request",
    "RequestTimeoutError",
    "Response",
    "RestObject",
    "SimpleClient",
    "SimpleHttpError",
    "TypedResponse",
    "XmlSerializer",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from simplehttp.client import SimpleClient
from simplehttp.config import DEFAULT_TIMEOUT, NO_TIMEOUT
from simplehttp.exceptions import DeserializationError, RequestTimeoutError, SimpleHttpError
from simplehttp.logger import HttpLogger, LoggingHttpLogger
from simplehttp.models import Request, Response, RestObject, TypedResponse
from simplehttp.serialization import BaseSerializer, JsonSerializer, XmlSerializer

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
