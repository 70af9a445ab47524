r"""XML serializer.

Values are rendered as an element tree whose root is named after the
value's type. Mapping keys become child elements, sequences become
repeated ``<item>`` children, and ``None`` values are omitted. The
document declares a UTF-16 encoding.

Decoding follows the type the document is decoded into, so that an
empty element becomes an empty list for a sequence field, an empty
object for a nested object field, and an empty string otherwise.
"""

from __future__ import annotations

__all__ = ["XmlSerializer"]

import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from simplehttp.exceptions import DeserializationError
from simplehttp.serialization.base import BaseSerializer
from simplehttp.serialization.introspection import (
    fields_of,
    is_mapping_type,
    is_sequence_type,
    item_type,
    unwrap,
    value_type,
)

T = TypeVar("T")

XML_DECLARATION = '<?xml version="1.0" encoding="utf-16"?>'
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
XSD_NAMESPACE = "http://www.w3.org/2001/XMLSchema"
ITEM_TAG = "item"

_DECLARATION_PATTERN = re.compile(r"^\s*<\?xml[^>]*\?>")


class XmlSerializer(BaseSerializer):
    r"""Serialize bodies to XML.

    Example:
        ```pycon
        >>> from dataclasses import dataclass
        >>> from simplehttp.serialization import XmlSerializer
        >>> @dataclass
        ... class Item:
        ...     name: str
        ...     count: int
        ...
        >>> serializer = XmlSerializer()
        >>> print(serializer.serialize(Item(name="pen", count=2)))
        <?xml version="1.0" encoding="utf-16"?>
        <Item xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance" xmlns:xsd="http://www.w3.org/2001/XMLSchema">
          <name>pen</name>
          <count>2</count>
        </Item>
        >>> serializer.deserialize("<Item><name>pen</name><count>2</count></Item>", Item)
        Item(name='pen', count=2)

        ```
    """

    def serialize(self, value: Any) -> str:
        tag = "root" if isinstance(value, Mapping) else type(value).__name__
        root = ET.Element(tag, {"xmlns:xsi": XSI_NAMESPACE, "xmlns:xsd": XSD_NAMESPACE})
        _fill_element(root, to_jsonable_python(value, fallback=vars))
        ET.indent(root, space="  ")
        return f"{XML_DECLARATION}\n{ET.tostring(root, encoding='unicode')}"

    def deserialize(self, data: str, type_: type[T]) -> T:
        try:
            # The declared encoding does not apply to already decoded text
            root = ET.fromstring(_DECLARATION_PATTERN.sub("", data, count=1))
        except (TypeError, ET.ParseError) as exc:
            msg = f"Invalid XML, cannot decode into {type_!r}: {exc}"
            raise DeserializationError(msg, type_=type_, data=data) from exc
        try:
            return TypeAdapter(type_).validate_python(_element_to_python(root, type_))
        except ValidationError as exc:
            msg = f"XML does not match {type_!r}: {exc}"
            raise DeserializationError(msg, type_=type_, data=data) from exc


def _fill_element(element: ET.Element, value: Any) -> None:
    if isinstance(value, dict):
        for key, child_value in value.items():
            if child_value is not None:
                _fill_element(ET.SubElement(element, str(key)), child_value)
    elif isinstance(value, list):
        for item in value:
            if item is not None:
                _fill_element(ET.SubElement(element, ITEM_TAG), item)
    elif isinstance(value, bool):
        element.text = "true" if value else "false"
    else:
        element.text = str(value)


def _strip_namespace(tag: str) -> str:
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _is_list_element(element: ET.Element) -> bool:
    return not (element.text or "").strip() and all(
        _strip_namespace(child.tag) == ITEM_TAG for child in element
    )


def _element_to_python(element: ET.Element, type_: Any = Any) -> Any:
    type_ = unwrap(type_)
    children = list(element)
    if is_sequence_type(type_):
        items = item_type(type_)
        return [_element_to_python(child, items) for child in children]

    fields = fields_of(type_)
    if not children:
        if element.text:
            return element.text
        return {} if fields is not None or is_mapping_type(type_) else ""
    if fields is None and not is_mapping_type(type_) and _is_list_element(element):
        return [_element_to_python(child) for child in children]

    grouped: dict[str, list[ET.Element]] = {}
    for child in children:
        grouped.setdefault(_strip_namespace(child.tag), []).append(child)

    result: dict[str, Any] = {}
    for tag, elements in grouped.items():
        child_type = unwrap(fields.get(tag, Any) if fields is not None else value_type(type_))
        repeated = len(elements) > 1
        if is_sequence_type(child_type) and (repeated or not _is_list_element(elements[0])):
            # Repeated elements, or a single element holding one value
            items = item_type(child_type)
            result[tag] = [_element_to_python(child, items) for child in elements]
        elif repeated:
            result[tag] = [_element_to_python(child, child_type) for child in elements]
        else:
            result[tag] = _element_to_python(elements[0], child_type)
    return result
