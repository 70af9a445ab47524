r"""Inspect the type a body is decoded into.

The serializers use these helpers to decode data against its target
type: field-bearing types (dataclasses, pydantic models, typed dicts)
expose their fields, while sequences and mappings expose the type of
their items and values. Anything else is opaque and decoded as is.
"""

from __future__ import annotations

__all__ = [
    "fields_of",
    "is_mapping_type",
    "is_sequence_type",
    "item_type",
    "unwrap",
    "value_type",
]

import collections.abc
import dataclasses
import types
import typing
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import BaseModel

_SEQUENCE_ORIGINS = frozenset(
    {
        list,
        tuple,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Collection,
        collections.abc.Iterable,
    }
)
_MAPPING_ORIGINS = frozenset(
    {dict, collections.abc.Mapping, collections.abc.MutableMapping}
)


def unwrap(type_: Any) -> Any:
    r"""Remove ``Annotated`` metadata and the ``None`` member of an
    optional type.

    Unions of several other types are returned unchanged.

    Example:
        ```pycon
        >>> from simplehttp.serialization.introspection import unwrap
        >>> unwrap(list[int] | None)
        list[int]
        >>> unwrap(int | str)
        int | str

        ```
    """
    origin = get_origin(type_)
    if origin is Annotated:
        return unwrap(get_args(type_)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(type_) if arg is not type(None)]
        if len(members) == 1:
            return unwrap(members[0])
    return type_


def _origin(type_: Any) -> Any:
    return get_origin(type_) or type_


def is_sequence_type(type_: Any) -> bool:
    r"""Indicate if values of a type are decoded from a list."""
    return _origin(type_) in _SEQUENCE_ORIGINS


def is_mapping_type(type_: Any) -> bool:
    r"""Indicate if values of a type are decoded from a mapping with
    arbitrary keys."""
    return _origin(type_) in _MAPPING_ORIGINS


def item_type(type_: Any) -> Any:
    r"""Return the type of the items of a sequence type, ``Any`` if
    unknown or heterogeneous."""
    args = get_args(type_)
    if len(args) == 1 or (len(args) == 2 and args[1] is Ellipsis):
        return args[0]
    return Any


def value_type(type_: Any) -> Any:
    r"""Return the type of the values of a mapping type, ``Any`` if
    unknown."""
    args = get_args(type_)
    return args[1] if len(args) == 2 else Any


def fields_of(type_: Any) -> dict[str, Any] | None:
    r"""Return the fields of a field-bearing type.

    Args:
        type_: The type to inspect.

    Returns:
        The annotation of each field, keyed by the names accepted on
        input (field names, and aliases for pydantic models), or
        ``None`` if the type has no fields.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from simplehttp.serialization.introspection import fields_of
        >>> @dataclass
        ... class User:
        ...     name: str
        ...
        >>> fields_of(User)
        {'name': <class 'str'>}
        >>> fields_of(dict[str, int]) is None
        True

        ```
    """
    cls = _origin(type_)
    if not isinstance(cls, type):
        return None
    if issubclass(cls, BaseModel):
        fields: dict[str, Any] = {}
        for name, info in cls.model_fields.items():
            fields[name] = info.annotation
            if info.alias:
                fields[info.alias] = info.annotation
        return fields
    if dataclasses.is_dataclass(cls):
        hints = _type_hints(cls)
        return {field.name: hints.get(field.name, Any) for field in dataclasses.fields(cls)}
    if typing.is_typeddict(cls):
        return _type_hints(cls)
    return None


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        # Unresolvable forward references, decoded without type guidance
        return {}
