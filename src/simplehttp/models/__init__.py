r"""Request and response models."""

from __future__ import annotations

__all__ = ["Request", "Response", "RestObject", "TypedResponse", "new_request_id"]

from simplehttp.models.request import Request
from simplehttp.models.response import Response, TypedResponse
from simplehttp.models.rest_object import RestObject, new_request_id
