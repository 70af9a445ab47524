r"""Parameter validation utilities for client and request configuration.

This module provides validation functions to ensure configuration
values meet the required constraints before being used to send a
request.
"""

from __future__ import annotations

__all__ = ["validate_status_codes", "validate_timeout"]

from typing import TYPE_CHECKING

from simplehttp.config import NO_TIMEOUT

if TYPE_CHECKING:
    from collections.abc import Iterable


def validate_timeout(timeout: float | None, name: str = "timeout") -> None:
    """Validate a timeout value.

    Args:
        timeout: Maximum seconds to wait for a request to complete.
            Must be >= 0, or -1 to disable the timeout. ``None`` is
            accepted and means "not set".
        name: The parameter name used in the error message.

    Raises:
        ValueError: If timeout is negative and not -1.

    Example:
        ```pycon
        >>> from simplehttp.core.validation import validate_timeout
        >>> validate_timeout(30)
        >>> validate_timeout(-1)
        >>> validate_timeout(None)
        >>> validate_timeout(-5)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be >= 0 or -1 to disable it, got -5

        ```
    """
    if timeout is None or timeout == NO_TIMEOUT:
        return
    if timeout < 0:
        msg = f"{name} must be >= 0 or {NO_TIMEOUT} to disable it, got {timeout}"
        raise ValueError(msg)


def validate_status_codes(status_codes: Iterable[int]) -> None:
    """Validate HTTP status codes.

    Args:
        status_codes: The status codes to validate. Each must be an
            integer between 100 and 599.

    Raises:
        ValueError: If a status code is outside the valid range.

    Example:
        ```pycon
        >>> from simplehttp.core.validation import validate_status_codes
        >>> validate_status_codes({404, 409})
        >>> validate_status_codes({42})  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: status codes must be between 100 and 599, got 42

        ```
    """
    for status_code in status_codes:
        if not 100 <= status_code <= 599:
            msg = f"status codes must be between 100 and 599, got {status_code}"
            raise ValueError(msg)
