from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from simplehttp.utils.structured_logging import clear_correlation_id

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_http_logger() -> Mock:
    """Create a mock ``HttpLogger`` recording its calls."""
    return Mock(spec=["log_request", "log_response"])


@pytest.fixture(autouse=True)
def _reset_correlation_id() -> Generator[None, None, None]:
    """Make sure no correlation id leaks from one test to another."""
    yield
    clear_correlation_id()
