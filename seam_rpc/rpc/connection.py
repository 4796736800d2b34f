"""
Connection management

Owns at most one live transport, opens it lazily with an establishment
timeout and turns transport faults into a single failure callback.
"""

import asyncio
import functools
import logging
from typing import Callable, Optional

from seam_rpc.config import DEFAULT_TIMEOUT_MS
from seam_rpc.errors import ConnectionClosedByCaller, EstablishmentTimeout, RpcError, TransportError
from seam_rpc.transport.base import MessageData, Transport

logger = logging.getLogger(__name__)

TransportFactory = Callable[[str], Transport]


class ConnectionManager:
    """
    Lazily established single-transport connection.

    Concurrent callers that find no open transport share one establishment
    attempt. Every failure (timeout, error or close) is reported through
    ``on_fault`` so the owner can fail its outstanding work.
    """

    def __init__(self,
                 endpoint: str,
                 transport_factory: TransportFactory,
                 on_message: Callable[[MessageData], None],
                 on_fault: Callable[[RpcError], None],
                 timeout_ms: int = DEFAULT_TIMEOUT_MS):
        """
        Args:
            endpoint: Transport endpoint URL/address
            transport_factory: Builds a new, unopened transport for the endpoint
            on_message: Receives every inbound message of the current transport
            on_fault: Receives the error of every connection-fatal condition
            timeout_ms: Connection establishment timeout in milliseconds
        """
        self.endpoint = endpoint
        self.timeout_ms = timeout_ms
        self._transport_factory = transport_factory
        self._on_message = on_message
        self._on_fault = on_fault

        self._transport: Optional[Transport] = None
        self._connecting: Optional[asyncio.Task] = None

    @property
    def transport(self) -> Optional[Transport]:
        return self._transport

    @property
    def connected(self) -> bool:
        return self._transport is not None and self._transport.is_open

    async def acquire_transport(self) -> Transport:
        """Return an open transport, establishing a new one if needed

        Raises:
            EstablishmentTimeout: Transport did not open within timeout_ms
            TransportError: Transport failed or closed while opening
        """
        transport = self._transport
        if transport is not None and transport.is_open:
            return transport

        task = self._connecting
        if task is None:
            task = asyncio.ensure_future(self._establish())
            task.add_done_callback(self._establishment_done)
            self._connecting = task

        # One caller giving up must not cancel the attempt for the others
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if task.cancelled():
                # close() cancelled the attempt before it reached its first await
                raise ConnectionClosedByCaller("Connection closed by caller") from None
            raise

    def _establishment_done(self, task: asyncio.Task) -> None:
        if self._connecting is task:
            self._connecting = None
        if not task.cancelled():
            # Mark retrieved even when every waiter was cancelled
            task.exception()

    async def _establish(self) -> Transport:
        await self._discard()

        transport = self._transport_factory(self.endpoint)
        transport.on_message = self._on_message
        transport.on_error = functools.partial(self._handle_error, transport)
        transport.on_close = functools.partial(self._handle_close, transport)

        logger.info(f"Connecting to {self.endpoint} (timeout {self.timeout_ms}ms)")
        try:
            await asyncio.wait_for(transport.open(), self.timeout_ms / 1000.0)
        except asyncio.CancelledError:
            await self._abandon(transport)
            raise ConnectionClosedByCaller("Connection closed by caller") from None
        except asyncio.TimeoutError:
            await self._abandon(transport)
            error = EstablishmentTimeout(f"Connection timed out after {self.timeout_ms}ms")
            self._fail(error)
            raise error from None
        except TransportError as e:
            await self._abandon(transport)
            self._fail(e)
            raise
        except Exception as e:
            await self._abandon(transport)
            error = TransportError(f"{transport.name} error: {e}")
            self._fail(error)
            raise error from e

        self._transport = transport
        logger.info(f"Connected to {self.endpoint}")
        return transport

    async def _abandon(self, transport: Transport) -> None:
        transport.detach()
        await transport.close()

    async def _discard(self) -> None:
        transport, self._transport = self._transport, None
        if transport is not None:
            await self._abandon(transport)

    def _handle_error(self, transport: Transport, error: Exception) -> None:
        if transport is not self._transport:
            return
        self._fail(TransportError(f"{transport.name} error: {error}"))

    def _handle_close(self, transport: Transport, reason: str) -> None:
        if transport is not self._transport:
            return
        self._fail(TransportError(f"{transport.name} closed: {reason}"))

    def _fail(self, error: RpcError) -> None:
        logger.error(f"Connection to {self.endpoint} failed: {error}")
        self._on_fault(error)

    async def close(self) -> None:
        """Close the current transport, if any

        Caller-initiated; does not report a fault. An establishment still in
        flight is cancelled and has released its transport on return.
        """
        task, self._connecting = self._connecting, None
        if task is not None and not task.done():
            task.cancel()
        await self._discard()
        if task is not None:
            # Outcome is delivered to the waiters, not to close()
            await asyncio.wait({task})
