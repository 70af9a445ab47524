from __future__ import annotations

import pytest

from simplehttp.core.validation import validate_status_codes, validate_timeout

######################################
#     Tests for validate_timeout     #
######################################


@pytest.mark.parametrize("timeout", [None, -1, 0, 0.5, 1, 30, 3600])
def test_validate_timeout_valid(timeout: float | None) -> None:
    """Test that valid timeouts are accepted."""
    validate_timeout(timeout)


@pytest.mark.parametrize("timeout", [-2, -0.1, -100])
def test_validate_timeout_invalid(timeout: float) -> None:
    """Test that invalid timeouts are rejected."""
    with pytest.raises(ValueError, match=r"timeout must be >= 0 or -1 to disable it"):
        validate_timeout(timeout)


def test_validate_timeout_custom_name() -> None:
    """Test that the error message names the parameter."""
    with pytest.raises(ValueError, match=r"timeout_override must be >= 0 or -1 to disable it, got -5"):
        validate_timeout(-5, name="timeout_override")


###########################################
#     Tests for validate_status_codes     #
###########################################


@pytest.mark.parametrize("status_codes", [(), {100}, {404, 409}, [599]])
def test_validate_status_codes_valid(status_codes: set[int]) -> None:
    """Test that valid status codes are accepted."""
    validate_status_codes(status_codes)


@pytest.mark.parametrize("status_code", [0, 42, 99, 600, 1000])
def test_validate_status_codes_invalid(status_code: int) -> None:
    """Test that out of range status codes are rejected."""
    with pytest.raises(ValueError, match=rf"status codes must be between 100 and 599, got {status_code}"):
        validate_status_codes({200, status_code})
