r"""Serializers used to encode request bodies and decode response
bodies.

This package provides the serializer interface and two
implementations: a JSON serializer (the client default) and an XML
serializer.
"""

from __future__ import annotations

__all__ = ["BaseSerializer", "JsonSerializer", "XmlSerializer"]

from simplehttp.serialization.base import BaseSerializer
from simplehttp.serialization.json_serializer import JsonSerializer
from simplehttp.serialization.xml_serializer import XmlSerializer
