r"""Abstract base class for request/response body serializers."""

from __future__ import annotations

__all__ = ["BaseSerializer"]

from abc import ABC, abstractmethod
from typing import Any, TypeVar

T = TypeVar("T")


class BaseSerializer(ABC):
    """Abstract base class for body serializers.

    A serializer turns the ``body`` of a request into text before it is
    sent, and decodes the text of a response into the type requested by
    the caller.
    """

    @abstractmethod
    def serialize(self, value: Any) -> str:
        """Serialize a value into text.

        Args:
            value: The value to serialize.

        Returns:
            The serialized text.
        """

    @abstractmethod
    def deserialize(self, data: str, type_: type[T]) -> T:
        """Decode text into a value of the given type.

        Args:
            data: The text to decode.
            type_: The type of the decoded value.

        Returns:
            The decoded value.

        Raises:
            DeserializationError: If the text is malformed or does not
                match the requested type.
        """
