r"""Unit tests for package initialization and metadata."""

from __future__ import annotations

import pytest

import simplehttp


def test_package_version_is_string() -> None:
    """Test that __version__ is a string."""
    assert isinstance(simplehttp.__version__, str)


def test_package_version_format() -> None:
    """Test that __version__ follows semantic versioning."""
    assert "." in simplehttp.__version__


def test_all_exports_defined() -> None:
    """Test that all items in __all__ are defined in the module."""
    for name in simplehttp.__all__:
        assert hasattr(simplehttp, name), f"{name} is in __all__ but not defined in module"


@pytest.mark.parametrize(
    "name",
    [
        "SimpleClient",
        "Request",
        "Response",
        "TypedResponse",
        "JsonSerializer",
        "XmlSerializer",
        "RequestTimeoutError",
    ],
)
def test_public_api(name: str) -> None:
    """Test that the public API is exported."""
    assert name in simplehttp.__all__


def test_default_timeout() -> None:
    """Test the exported timeout constants."""
    assert simplehttp.DEFAULT_TIMEOUT == 30
    assert simplehttp.NO_TIMEOUT == -1
