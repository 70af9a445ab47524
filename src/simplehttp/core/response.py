r"""Fill a ``Response`` from the response returned by the transport."""

from __future__ import annotations

__all__ = [
    "add_response_body",
    "deserialize_body",
    "is_successful_status",
    "populate_response",
]

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    import httpx

    from simplehttp.models import Response, TypedResponse
    from simplehttp.serialization import BaseSerializer

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_ENCODING = "utf-8"


def is_successful_status(status_code: int, additional_status_codes: Iterable[int] = ()) -> bool:
    r"""Indicate if a status code is successful.

    Args:
        status_code: The HTTP status code.
        additional_status_codes: Status codes considered successful in
            addition to 200-299.

    Returns:
        ``True`` if the status code is successful.

    Example:
        ```pycon
        >>> from simplehttp.core.response import is_successful_status
        >>> is_successful_status(201)
        True
        >>> is_successful_status(404)
        False
        >>> is_successful_status(404, {404})
        True

        ```
    """
    return 200 <= status_code <= 299 or status_code in set(additional_status_codes)


def populate_response(
    http_response: httpx.Response,
    response: Response,
    additional_status_codes: Iterable[int] = (),
) -> None:
    r"""Copy the status and headers of a transport response.

    Headers with several values are joined with ``", "``.

    Args:
        http_response: The response returned by the transport.
        response: The response to fill.
        additional_status_codes: Status codes considered successful in
            addition to 200-299, usually the union of the client and
            request level ones.
    """
    for name in http_response.headers:
        response.headers[name] = ", ".join(http_response.headers.get_list(name))
    response.status_code = http_response.status_code
    response.is_successful = is_successful_status(
        http_response.status_code, additional_status_codes
    )


def add_response_body(response: Response, content: bytes, encoding: str | None = None) -> None:
    r"""Store the body of a response.

    The raw bytes are stored in ``byte_body`` and decoded once into
    ``string_body``. Bytes that cannot be decoded are replaced.

    Args:
        response: The response to fill.
        content: The raw body.
        encoding: The charset of the body, UTF-8 if ``None`` or unknown.
    """
    response.byte_body = content
    try:
        response.string_body = content.decode(encoding or DEFAULT_RESPONSE_ENCODING, errors="replace")
    except LookupError:
        response.string_body = content.decode(DEFAULT_RESPONSE_ENCODING, errors="replace")


def deserialize_body(
    response: TypedResponse[Any], serializer: BaseSerializer, response_type: Any
) -> None:
    r"""Decode the string body of a response into its typed body.

    Decoding is best effort: any error is stored in
    ``response.deserialization_error`` and ``response.body`` is left
    unset. The error is not raised so that the status, headers and raw
    body of the response stay available to the caller.

    Args:
        response: The response to fill.
        serializer: The serializer used to decode the body.
        response_type: The type to decode the body into.
    """
    try:
        response.body = serializer.deserialize(response.string_body or "", response_type)
    except Exception as exc:  # noqa: BLE001
        logger.debug(f"Could not deserialize response body into {response_type!r}: {exc}")
        response.deserialization_error = exc
