r"""Define the base shape shared by requests and responses."""

from __future__ import annotations

__all__ = ["RestObject", "new_request_id"]

import uuid
from dataclasses import dataclass, field
from typing import Any

import httpx


def new_request_id() -> str:
    r"""Generate a new opaque correlation id.

    Returns:
        A random UUID4 rendered as a string.
    """
    return str(uuid.uuid4())


@dataclass(kw_only=True)
class RestObject:
    r"""Base fields shared by requests and responses.

    Headers are stored in an ``httpx.Headers`` so that lookups are
    case-insensitive. Any mapping passed at construction is converted.

    The ``id`` is generated once when the object is created and cannot
    be reassigned afterwards. A response is created with the id of the
    request it answers.

    Args:
        headers: The headers.
        string_body: The body as text.
        id: The correlation id. A new one is generated if omitted.

    Example:
        ```pycon
        >>> from simplehttp.models import RestObject
        >>> obj = RestObject(headers={"X-Test": "a"})
        >>> obj.headers["x-test"]
        'a'
        >>> obj.id = "other"  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        AttributeError: id cannot be changed once set

        ```
    """

    headers: httpx.Headers = field(default_factory=httpx.Headers)
    string_body: str | None = None
    id: str = field(default_factory=new_request_id)

    def __post_init__(self) -> None:
        if not isinstance(self.headers, httpx.Headers):
            self.headers = httpx.Headers(self.headers)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__:
            msg = "id cannot be changed once set"
            raise AttributeError(msg)
        super().__setattr__(name, value)
