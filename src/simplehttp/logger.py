r"""Request/response logging hooks.

A ``SimpleClient`` calls its ``HttpLogger`` right before a request is
sent and right after its response is received. The hooks are purely
observational; an exception raised by a hook is not caught and fails
the request.
"""

from __future__ import annotations

__all__ = ["HttpLogger", "LoggingHttpLogger"]

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from simplehttp.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from simplehttp.models import Request, Response


@runtime_checkable
class HttpLogger(Protocol):
    r"""Define the interface of request/response loggers."""

    def log_request(self, url: str, request: Request) -> None:
        r"""Log a request right before it is sent.

        Args:
            url: The URL the request is sent to.
            request: The request. Its ``string_body`` contains the
                serialized body, if any.
        """

    def log_response(self, response: Response) -> None:
        r"""Log a response right after it is received.

        Args:
            response: The response. Its ``id`` is the id of the request.
        """


class LoggingHttpLogger:
    r"""An ``HttpLogger`` writing to a standard library logger.

    Every entry carries structured fields (``request_id``, ``method``,
    ``url``, ``status_code``, ...) rendered by ``StructuredFormatter``.

    Args:
        logger: The logger to write to. Defaults to the
            ``simplehttp.http`` logger.
        level: The level of the entries.
        log_bodies: If ``True``, the string bodies are logged too.

    Example:
        ```pycon
        >>> import logging
        >>> from simplehttp import SimpleClient
        >>> from simplehttp.logger import LoggingHttpLogger
        >>> client = SimpleClient(
        ...     "https://api.example.com", logger=LoggingHttpLogger(level=logging.INFO)
        ... )

        ```
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        level: int = logging.DEBUG,
        log_bodies: bool = False,
    ) -> None:
        self._logger = logger or logging.getLogger("simplehttp.http")
        self._level = level
        self._log_bodies = log_bodies

    def log_request(self, url: str, request: Request) -> None:
        extra = {"request_id": request.id, "method": request.method, "url": url}
        if self._log_bodies:
            extra["body"] = request.string_body
        log_structured(self._logger, self._level, f"{request.method} {url}", **extra)

    def log_response(self, response: Response) -> None:
        extra = {
            "request_id": response.id,
            "status_code": response.status_code,
            "is_successful": response.is_successful,
            "body_bytes": len(response.byte_body),
        }
        if self._log_bodies:
            extra["body"] = response.string_body
        log_structured(
            self._logger,
            self._level,
            f"Response {response.status_code} for request {response.id}",
            **extra,
        )
