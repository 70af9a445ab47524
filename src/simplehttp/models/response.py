r"""Define the response models."""

from __future__ import annotations

__all__ = ["Response", "TypedResponse"]

from dataclasses import dataclass
from typing import Generic, TypeVar

from simplehttp.models.rest_object import RestObject

T = TypeVar("T")


@dataclass(kw_only=True)
class Response(RestObject):
    r"""An HTTP response without a typed body.

    A non-successful status code is not an error: it is reflected by
    ``is_successful`` and ``status_code`` only.

    Args:
        status_code: The HTTP status code.
        is_successful: ``True`` if the status code is in 200-299 or is
            one of the additional successful status codes.
        byte_body: The raw response body.
    """

    status_code: int = 0
    is_successful: bool = False
    byte_body: bytes = b""


@dataclass(kw_only=True)
class TypedResponse(Response, Generic[T]):
    r"""An HTTP response whose body was decoded into a type.

    Decoding is best effort. When it fails the error is stored in
    ``deserialization_error`` and ``body`` stays ``None``; the caller
    must check it explicitly.

    Args:
        body: The decoded body.
        deserialization_error: The exception raised while decoding the
            body, if any.
    """

    body: T | None = None
    deserialization_error: Exception | None = None
