r"""Define the request model."""

from __future__ import annotations

__all__ = ["Request"]

from dataclasses import KW_ONLY, dataclass, field
from typing import TYPE_CHECKING, Any

from simplehttp.config import DEFAULT_CONTENT_ENCODING, DEFAULT_CONTENT_TYPE
from simplehttp.core.validation import validate_status_codes, validate_timeout
from simplehttp.models.rest_object import RestObject

if TYPE_CHECKING:
    from simplehttp.serialization import BaseSerializer


@dataclass
class Request(RestObject):
    r"""Describe an HTTP request to send with a ``SimpleClient``.

    The request is owned by the caller. The client only reads it, except
    for two documented normalizations performed while the request is
    assembled: ``content_type`` may be taken from a ``Content-Type``
    header, and ``string_body`` receives the serialized ``body`` so that
    loggers see exactly what was sent.

    Args:
        path: The path appended to the client's host, or a full URL when
            the client has no host.
        method: The HTTP method. It is upper-cased.
        body: An object serialized into the request body. A ``str`` body
            is also used as ``string_body``.
        url_override: A full URL replacing the host and path resolution.
        query_string_parameters: Query parameters. They overwrite
            parameters of the same name already present in the URL.
        form_url_encoded_parameters: Form fields. When present they are
            sent as a form url encoded body, whatever the other body
            fields contain.
        content_type: The content type of string and serialized bodies.
        content_encoding: The codec used to encode string and serialized
            bodies.
        serializer_override: A serializer used instead of the client's
            serializer for this request.
        additional_successful_status_codes: Status codes considered
            successful for this request in addition to 200-299 and the
            client-level ones.
        timeout_override: A timeout in seconds used instead of the
            client's timeout. ``-1`` disables the timeout.

    Example:
        ```pycon
        >>> from simplehttp import Request
        >>> request = Request("/post", "post", body={"name": "value"})
        >>> request.method
        'POST'
        >>> request.content_type
        'application/json'
        >>> Request("/post", "POST", body="raw text").string_body
        'raw text'

        ```
    """

    path: str | None
    method: str = "GET"
    body: Any = None
    _: KW_ONLY
    url_override: str | None = None
    query_string_parameters: dict[str, str] = field(default_factory=dict)
    form_url_encoded_parameters: dict[str, str] = field(default_factory=dict)
    content_type: str = DEFAULT_CONTENT_TYPE
    content_encoding: str = DEFAULT_CONTENT_ENCODING
    serializer_override: BaseSerializer | None = None
    additional_successful_status_codes: set[int] = field(default_factory=set)
    timeout_override: float | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        self.method = self.method.upper()
        if isinstance(self.body, str) and self.string_body is None:
            self.string_body = self.body
        self.additional_successful_status_codes = set(self.additional_successful_status_codes)
        validate_status_codes(self.additional_successful_status_codes)
        validate_timeout(self.timeout_override, name="timeout_override")
