r"""Core request execution pipeline.

This package contains the building blocks used by ``SimpleClient``: URL
building, request assembly, transport lifecycle management, response
assembly and parameter validation.
"""

from __future__ import annotations

__all__ = [
    "TransportFactory",
    "TransportManager",
    "add_response_body",
    "build_request",
    "build_url",
    "combine_urls",
    "create_transport",
    "deserialize_body",
    "is_successful_status",
    "merge_headers",
    "populate_response",
    "validate_status_codes",
    "validate_timeout",
]

from simplehttp.core.assembly import build_request, merge_headers
from simplehttp.core.response import (
    add_response_body,
    deserialize_body,
    is_successful_status,
    populate_response,
)
from simplehttp.core.transport import TransportFactory, TransportManager, create_transport
from simplehttp.core.url import build_url, combine_urls
from simplehttp.core.validation import validate_status_codes, validate_timeout
