from __future__ import annotations

import asyncio
import logging
from http.cookiejar import CookieJar
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from simplehttp.core.transport import TransportManager, create_transport


def make_transport() -> Mock:
    return Mock(spec=httpx.AsyncClient, aclose=AsyncMock())


######################################
#     Tests for create_transport     #
######################################


@pytest.mark.asyncio
async def test_create_transport() -> None:
    """Test the configuration of a created transport."""
    transport = create_transport()
    try:
        assert isinstance(transport, httpx.AsyncClient)
        assert transport.follow_redirects
        assert transport.timeout == httpx.Timeout(None)
    finally:
        await transport.aclose()


@pytest.mark.asyncio
async def test_create_transport_does_not_store_cookies() -> None:
    """Test that the transport cookie jar never stores cookies."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            headers={"Set-Cookie": "session=secret; Path=/"},
            text=request.headers.get("cookie", ""),
        )

    transport = create_transport()
    jar = transport.cookies.jar
    await transport.aclose()
    assert isinstance(jar, CookieJar)

    async with httpx.AsyncClient(cookies=jar, transport=httpx.MockTransport(handler)) as client:
        await client.get("https://api.example.com/cookies/set")
        response = await client.get("https://api.example.com/cookies")
    assert response.text == ""
    assert len(jar) == 0


######################################
#     Tests for TransportManager     #
######################################


def test_transport_manager_invalid_replacement_interval() -> None:
    """Test that a non-positive replacement interval is rejected."""
    with pytest.raises(ValueError, match=r"replacement_interval must be > 0, got 0"):
        TransportManager(replacement_interval=0)


@pytest.mark.asyncio
async def test_transport_manager_owned_transport_created_lazily() -> None:
    """Test that the owned transport is created at first use."""
    transport = make_transport()
    with patch(
        "simplehttp.core.transport.create_transport", return_value=transport
    ) as mock_create:
        manager = TransportManager()
        assert manager.owns_transport
        mock_create.assert_not_called()
        assert manager.get_transport() is transport
        assert manager.get_transport() is transport
        mock_create.assert_called_once_with()
        await manager.aclose()
    transport.aclose.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_transport_manager_factory() -> None:
    """Test that factory transports are neither replaced nor closed."""
    transport = make_transport()
    factory = Mock(return_value=transport)
    manager = TransportManager(factory)
    assert not manager.owns_transport
    async with manager.lease() as leased:
        assert leased is transport
    assert manager.get_transport() is transport
    assert factory.call_count == 2
    await manager.replace_transport()
    await manager.aclose()
    transport.aclose.assert_not_called()


@pytest.mark.asyncio
async def test_transport_manager_replace_idle_transport() -> None:
    """Test that an idle transport is closed when replaced."""
    old, new = make_transport(), make_transport()
    with patch("simplehttp.core.transport.create_transport", side_effect=[old, new]):
        manager = TransportManager()
        async with manager.lease():
            pass
        await manager.replace_transport()
        old.aclose.assert_awaited_once_with()
        assert manager.get_transport() is new
        await manager.aclose()
    new.aclose.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_transport_manager_replace_keeps_in_flight_transport() -> None:
    """Test that a transport in use is closed after its last lease."""
    old, new = make_transport(), make_transport()
    with patch("simplehttp.core.transport.create_transport", side_effect=[old, new]):
        manager = TransportManager()
        async with manager.lease() as first, manager.lease() as second:
            assert first is second is old
            await manager.replace_transport()
            # New requests use the new transport
            async with manager.lease() as third:
                assert third is new
            old.aclose.assert_not_called()
        old.aclose.assert_awaited_once_with()
        new.aclose.assert_not_called()
        await manager.aclose()
    new.aclose.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_transport_manager_lease_released_on_error() -> None:
    """Test that a lease is released when the request fails."""
    old, new = make_transport(), make_transport()
    with patch("simplehttp.core.transport.create_transport", side_effect=[old, new]):
        manager = TransportManager()
        with pytest.raises(RuntimeError, match=r"request failed"):
            async with manager.lease():
                await manager.replace_transport()
                msg = "request failed"
                raise RuntimeError(msg)
        old.aclose.assert_awaited_once_with()
        await manager.aclose()


@pytest.mark.asyncio
async def test_transport_manager_replaced_periodically() -> None:
    """Test that the owned transport is replaced periodically."""
    transports = [make_transport() for _ in range(50)]
    with patch(
        "simplehttp.core.transport.create_transport", side_effect=transports
    ) as mock_create:
        manager = TransportManager(replacement_interval=0.01)
        first = manager.get_transport()
        await asyncio.sleep(0.1)
        assert mock_create.call_count > 1
        assert manager.get_transport() is not first
        first.aclose.assert_awaited_once_with()
        await manager.aclose()
        count = mock_create.call_count
        await asyncio.sleep(0.05)
        assert mock_create.call_count == count


@pytest.mark.asyncio
async def test_transport_manager_replacement_failure_is_logged(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Test that a failed replacement is logged and retried."""
    first = make_transport()
    transports = [first, OSError("too many open files")] + [make_transport() for _ in range(50)]
    with patch(
        "simplehttp.core.transport.create_transport", side_effect=transports
    ) as mock_create:
        manager = TransportManager(replacement_interval=0.01)
        assert manager.get_transport() is first
        with caplog.at_level(logging.ERROR, logger="simplehttp.core.transport"):
            await asyncio.sleep(0.1)
        # The replacement loop keeps running after the failure
        assert mock_create.call_count > 2
        assert manager.get_transport() is not first
        first.aclose.assert_awaited_once_with()
        await manager.aclose()
    assert "Transport replacement failed" in caplog.text
    assert caplog.records[0].exc_info[0] is OSError


@pytest.mark.asyncio
async def test_transport_manager_aclose_idempotent() -> None:
    """Test that closing a manager twice closes the transport once."""
    transport = make_transport()
    with patch("simplehttp.core.transport.create_transport", return_value=transport):
        manager = TransportManager()
        manager.get_transport()
        await manager.aclose()
        await manager.aclose()
    assert manager.is_closed
    transport.aclose.assert_awaited_once_with()


@pytest.mark.asyncio
async def test_transport_manager_aclose_without_transport() -> None:
    """Test closing a manager that never created a transport."""
    with patch("simplehttp.core.transport.create_transport") as mock_create:
        manager = TransportManager()
        await manager.aclose()
    assert manager.is_closed
    mock_create.assert_not_called()


@pytest.mark.asyncio
async def test_transport_manager_closed() -> None:
    """Test that a closed manager rejects new leases."""
    manager = TransportManager()
    await manager.aclose()
    with pytest.raises(RuntimeError, match=r"TransportManager is closed"):
        manager.get_transport()
    await manager.replace_transport()


@pytest.mark.asyncio
async def test_transport_manager_aclose_with_retired_transport_in_use() -> None:
    """Test that retired transports in use are closed after release."""
    old, new = make_transport(), make_transport()
    with patch("simplehttp.core.transport.create_transport", side_effect=[old, new]):
        manager = TransportManager()
        async with manager.lease():
            await manager.replace_transport()
            await manager.aclose()
            new.aclose.assert_awaited_once_with()
            old.aclose.assert_not_called()
        old.aclose.assert_awaited_once_with()
