r"""Helpers to convert field names between snake_case and camelCase.

Only field names are converted. Mapping keys are part of the data and
are never renamed.
"""

from __future__ import annotations

__all__ = ["to_camel", "to_camel_fields", "to_field_names", "to_snake"]

import dataclasses
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError, to_jsonable_python

from simplehttp.serialization.introspection import (
    fields_of,
    is_mapping_type,
    is_sequence_type,
    item_type,
    unwrap,
    value_type,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

_SNAKE_KEY = re.compile(r"^[a-z][a-z0-9]*(_[a-z0-9]+)+$")
_CAMEL_KEY = re.compile(r"^[a-z][a-z0-9]*([A-Z][a-z0-9]*)+$")
_UPPER = re.compile(r"(?<!^)(?=[A-Z])")


def to_camel(key: str) -> str:
    r"""Convert a snake_case key to camelCase.

    Keys that are not snake_case identifiers (``content-type``,
    ``X-Header``, ``param1``) are returned unchanged.

    Example:
        ```pycon
        >>> from simplehttp.serialization.naming import to_camel
        >>> to_camel("first_name")
        'firstName'
        >>> to_camel("content-type")
        'content-type'

        ```
    """
    if not _SNAKE_KEY.match(key):
        return key
    head, *tail = key.split("_")
    return head + "".join(part.capitalize() for part in tail)


def to_snake(key: str) -> str:
    r"""Convert a camelCase key to snake_case.

    Keys that are not camelCase identifiers are returned unchanged.

    Example:
        ```pycon
        >>> from simplehttp.serialization.naming import to_snake
        >>> to_snake("firstName")
        'first_name'
        >>> to_snake("user-agent")
        'user-agent'

        ```
    """
    if not _CAMEL_KEY.match(key):
        return key
    return _UPPER.sub("_", key).lower()


def to_camel_fields(value: Any) -> Any:
    r"""Convert a value to JSON-compatible data with camelCase field
    names.

    The fields of dataclasses, pydantic models and plain objects are
    renamed to camelCase (a pydantic alias is used as is) and ``None``
    fields are omitted. Mapping keys are data, not field names: they
    are kept unchanged, like ``None`` mapping values.

    Args:
        value: The value to convert.

    Returns:
        The converted data.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from simplehttp.serialization.naming import to_camel_fields
        >>> @dataclass
        ... class User:
        ...     first_name: str
        ...     extra: dict
        ...     nickname: str | None = None
        ...
        >>> to_camel_fields(User(first_name="Ada", extra={"page_size": 10}))
        {'firstName': 'Ada', 'extra': {'page_size': 10}}

        ```
    """
    if isinstance(value, BaseModel):
        return _fields_to_data(
            (info.alias or to_camel(name), getattr(value, name))
            for name, info in type(value).model_fields.items()
        )
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _fields_to_data(
            (to_camel(field.name), getattr(value, field.name))
            for field in dataclasses.fields(value)
        )
    if isinstance(value, Mapping):
        return {key: to_camel_fields(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_camel_fields(item) for item in value]
    try:
        return to_jsonable_python(value)
    except PydanticSerializationError:
        if not hasattr(value, "__dict__"):
            raise
        return _fields_to_data((to_camel(name), item) for name, item in vars(value).items())


def _fields_to_data(fields: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    return {name: to_camel_fields(item) for name, item in fields if item is not None}


def to_field_names(data: Any, type_: Any) -> Any:
    r"""Rename the keys of decoded JSON data to the field names of the
    type it is decoded into.

    A key is renamed only where the target is a field-bearing type and
    the key is the camelCase form of one of its fields. Keys of mapping
    targets (``dict``, ``Mapping``, ...) and of untyped data are kept
    unchanged.

    Args:
        data: The decoded JSON data.
        type_: The type the data is decoded into.

    Returns:
        The data with renamed keys.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from simplehttp.serialization.naming import to_field_names
        >>> @dataclass
        ... class Page:
        ...     next_page_token: str
        ...
        >>> to_field_names({"nextPageToken": "abc"}, Page)
        {'next_page_token': 'abc'}
        >>> to_field_names({"nextPageToken": "abc"}, dict)
        {'nextPageToken': 'abc'}

        ```
    """
    type_ = unwrap(type_)
    if isinstance(data, list):
        if not is_sequence_type(type_):
            return data
        items = item_type(type_)
        return [to_field_names(item, items) for item in data]
    if not isinstance(data, dict):
        return data

    fields = fields_of(type_)
    if fields is None:
        if not is_mapping_type(type_):
            return data
        values = value_type(type_)
        return {key: to_field_names(value, values) for key, value in data.items()}

    renamed = {}
    for key, value in data.items():
        name = key if key in fields else to_snake(key)
        if name not in fields:
            name = key
        renamed[name] = to_field_names(value, fields.get(name, Any))
    return renamed
