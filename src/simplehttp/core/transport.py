r"""Manage the lifecycle of the transport used to send requests.

The transport is an ``httpx.AsyncClient``. It is either provided by an
external factory, in which case its lifecycle belongs to the caller, or
created and owned by the ``TransportManager``.

A long-lived connection pool keeps using the DNS resolution of its open
connections. To pick up DNS changes, an owned transport is replaced
periodically by a background task. Requests that already leased the
previous transport keep using it, and it is closed when the last of
them completes.
"""

from __future__ import annotations

__all__ = ["TransportFactory", "TransportManager", "create_transport"]

import asyncio
import contextlib
import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import TYPE_CHECKING

import httpx

from simplehttp.config import TRANSPORT_REPLACEMENT_INTERVAL

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger: logging.Logger = logging.getLogger(__name__)

TransportFactory = Callable[[], httpx.AsyncClient]


def create_transport() -> httpx.AsyncClient:
    r"""Create a transport with the default settings.

    The transport follows redirects, decodes compressed responses (done
    by ``httpx`` out of the box), does not keep cookies and has no
    timeout of its own: timeouts are enforced per request by the client.

    Returns:
        A new ``httpx.AsyncClient``.
    """
    # An empty allow-list rejects every domain: cookies are never stored or sent
    cookies = CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))
    return httpx.AsyncClient(cookies=cookies, follow_redirects=True, timeout=None)


class TransportManager:
    r"""Provide the transport used to send each request.

    Args:
        transport_factory: An optional callable returning the
            ``httpx.AsyncClient`` to use for a request. It is called for
            every request and the returned transports are never closed
            by the manager. If ``None``, the manager creates and owns a
            single transport, replaced every ``replacement_interval``
            seconds.
        replacement_interval: The number of seconds between two
            replacements of an owned transport. Must be > 0.

    Example:
        ```pycon
        >>> import asyncio
        >>> from simplehttp.core.transport import TransportManager
        >>> async def main():
        ...     manager = TransportManager()
        ...     async with manager.lease() as transport:
        ...         pass  # send requests with ``transport``
        ...     await manager.aclose()
        ...     return manager.is_closed
        ...
        >>> asyncio.run(main())
        True

        ```
    """

    def __init__(
        self,
        transport_factory: TransportFactory | None = None,
        replacement_interval: float = TRANSPORT_REPLACEMENT_INTERVAL,
    ) -> None:
        if replacement_interval <= 0:
            msg = f"replacement_interval must be > 0, got {replacement_interval}"
            raise ValueError(msg)
        self._factory = transport_factory
        self._replacement_interval = replacement_interval

        self._transport: httpx.AsyncClient | None = None
        self._leases: dict[httpx.AsyncClient, int] = {}
        self._retired: set[httpx.AsyncClient] = set()
        self._timer: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def owns_transport(self) -> bool:
        r"""``True`` if the transports are created and closed by this
        manager."""
        return self._factory is None

    @property
    def is_closed(self) -> bool:
        return self._closed

    def get_transport(self) -> httpx.AsyncClient:
        r"""Return the transport to use for a request.

        For an owned transport, the first call creates it and starts the
        replacement timer, so it must happen inside a running event loop.

        Returns:
            The transport.

        Raises:
            RuntimeError: If the manager is closed.
        """
        if self._closed:
            msg = "TransportManager is closed"
            raise RuntimeError(msg)
        if self._factory is not None:
            return self._factory()

        if self._transport is None:
            logger.debug("Creating transport")
            self._transport = create_transport()
        if self._timer is None:
            self._timer = asyncio.get_running_loop().create_task(self._replace_periodically())
        return self._transport

    @asynccontextmanager
    async def lease(self) -> AsyncGenerator[httpx.AsyncClient, None]:
        r"""Lease the transport for the duration of a request.

        While a transport is leased it is not closed by a replacement.

        Yields:
            The transport.
        """
        transport = self.get_transport()
        if not self.owns_transport:
            yield transport
            return

        self._leases[transport] = self._leases.get(transport, 0) + 1
        try:
            yield transport
        finally:
            await self._release(transport)

    async def _release(self, transport: httpx.AsyncClient) -> None:
        remaining = self._leases[transport] - 1
        if remaining > 0:
            self._leases[transport] = remaining
            return
        del self._leases[transport]
        if transport in self._retired:
            self._retired.discard(transport)
            logger.debug("Closing retired transport after its last request")
            await transport.aclose()

    async def replace_transport(self) -> None:
        r"""Replace the owned transport with a new one.

        The previous transport is closed right away if no request is
        using it, otherwise when the last request using it completes.
        Does nothing if the transport is provided by a factory or the
        manager is closed.
        """
        if not self.owns_transport or self._closed:
            return
        previous = self._transport
        logger.debug("Replacing transport")
        self._transport = create_transport()
        if previous is None:
            return
        if self._leases.get(previous):
            self._retired.add(previous)
        else:
            await previous.aclose()

    async def _replace_periodically(self) -> None:
        while True:
            await asyncio.sleep(self._replacement_interval)
            try:
                await self.replace_transport()
            except Exception:
                logger.exception("Transport replacement failed, retrying at the next interval")

    async def aclose(self) -> None:
        r"""Stop the replacement timer and close the owned transports.

        Retired transports still in use are closed when their last
        request completes. Calling this method more than once is safe.
        """
        if self._closed:
            return
        self._closed = True

        if self._timer is not None:
            self._timer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._timer
            self._timer = None

        transports = [t for t in self._retired if not self._leases.get(t)]
        self._retired.difference_update(transports)
        if self._transport is not None:
            transports.append(self._transport)
            self._transport = None
        for transport in transports:
            await transport.aclose()
        logger.debug(f"Closed {len(transports)} transport(s)")
