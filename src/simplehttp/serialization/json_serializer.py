r"""Default JSON serializer."""

from __future__ import annotations

__all__ = ["JsonSerializer"]

import json
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from simplehttp.exceptions import DeserializationError
from simplehttp.serialization.base import BaseSerializer
from simplehttp.serialization.naming import to_camel_fields, to_field_names

T = TypeVar("T")


class JsonSerializer(BaseSerializer):
    r"""Serialize bodies to indented, camelCase JSON.

    The fields of dataclasses, pydantic models and plain objects (from
    their ``__dict__``) are renamed to camelCase and ``None`` fields are
    omitted. Mapping keys are data and are written unchanged.

    Decoding maps camelCase keys back to the fields of the requested
    type, leaving the keys of mappings untouched, and validates the
    result into that type with ``pydantic``.

    Args:
        indent: The number of spaces used to indent the output.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from simplehttp.serialization import JsonSerializer
        >>> @dataclass
        ... class User:
        ...     first_name: str
        ...     nickname: str | None = None
        ...
        >>> serializer = JsonSerializer()
        >>> print(serializer.serialize(User(first_name="Ada")))
        {
          "firstName": "Ada"
        }
        >>> serializer.deserialize('{"firstName": "Ada"}', User)
        User(first_name='Ada', nickname=None)

        ```
    """

    def __init__(self, indent: int = 2) -> None:
        self._indent = indent

    def serialize(self, value: Any) -> str:
        return json.dumps(to_camel_fields(value), indent=self._indent)

    def deserialize(self, data: str, type_: type[T]) -> T:
        try:
            decoded = json.loads(data)
        except (TypeError, json.JSONDecodeError) as exc:
            msg = f"Invalid JSON, cannot decode into {type_!r}: {exc}"
            raise DeserializationError(msg, type_=type_, data=data) from exc
        try:
            return TypeAdapter(type_).validate_python(to_field_names(decoded, type_))
        except ValidationError as exc:
            msg = f"JSON does not match {type_!r}: {exc}"
            raise DeserializationError(msg, type_=type_, data=data) from exc
