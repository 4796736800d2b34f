"""
Awaitable JSON-RPC 2.0 client

Combines the connection manager and the request correlator behind the
call / notify / close surface shared by all client adapters.
"""

import logging
from typing import Any, Callable, Optional

from seam_rpc.adapters.adapter_interface import ClientAdapterInterface
from seam_rpc.config import DEFAULT_TIMEOUT_MS
from seam_rpc.errors import ConnectionClosedByCaller, RpcError, TransportError
from seam_rpc.rpc.connection import ConnectionManager, TransportFactory
from seam_rpc.rpc.correlator import RequestCorrelator
from seam_rpc.rpc.envelope import build_notification, encode
from seam_rpc.telemetry.metrics import increment_counter

logger = logging.getLogger(__name__)


class RpcClient(ClientAdapterInterface):
    """
    Request/response client over a duplex message transport.

    The transport is opened on first use and reopened on the next call after
    any failure. Responses are matched to requests by id, in any order.
    """

    def __init__(self,
                 endpoint: str,
                 transport_factory: TransportFactory,
                 timeout_ms: int = DEFAULT_TIMEOUT_MS,
                 request_timeout_ms: Optional[int] = None,
                 id_generator: Optional[Callable[[], str]] = None):
        """
        Args:
            endpoint: Transport endpoint URL/address
            transport_factory: Builds an unopened transport for the endpoint
            timeout_ms: Connection establishment timeout in milliseconds
            request_timeout_ms: Per-request timeout, defaults to timeout_ms
            id_generator: Request id source, defaults to random UUID4 strings
        """
        self.timeout_ms = timeout_ms
        self.request_timeout_ms = request_timeout_ms or timeout_ms
        self.correlator = RequestCorrelator(
            timeout_ms=self.request_timeout_ms,
            id_generator=id_generator,
        )
        self.connection = ConnectionManager(
            endpoint,
            transport_factory,
            on_message=self.correlator.route_message,
            on_fault=self._handle_fault,
            timeout_ms=timeout_ms,
        )

    @property
    def endpoint(self) -> str:
        return self.connection.endpoint

    @property
    def connected(self) -> bool:
        return self.connection.connected

    @property
    def pending_count(self) -> int:
        return self.correlator.pending_count

    def _handle_fault(self, error: RpcError) -> None:
        self.correlator.sweep_all(error)

    async def call(self, method: str, params: Any = None) -> Any:
        """Send a request and wait for its result

        Args:
            method: Remote method name
            params: Method parameters (defaults to an empty object)

        Returns:
            The ``result`` member of the matching response

        Raises:
            RemoteError: Peer answered with an error envelope
            RequestTimeout: No response within request_timeout_ms
            EstablishmentTimeout: Transport could not be opened in time
            TransportError: Transport failed while the request was pending
        """
        if params is None:
            params = {}

        request, future = self.correlator.register(method, params)
        request_id = request["id"]
        try:
            try:
                transport = await self.connection.acquire_transport()
            except RpcError as e:
                # Normally already swept by the connection fault path
                self.correlator.reject(request_id, e)
            else:
                logger.debug(f"Sending request {request_id}: {method}")
                try:
                    await transport.send(encode(request))
                except TransportError as e:
                    logger.warning(f"Failed to send request {request_id} ({method}): {e}")
                    increment_counter("rpc.client.errors", 1, {"type": "send_error", "method": method})
                    self.correlator.reject(request_id, e)

            return await future
        finally:
            # No-op once settled; clears the entry if the caller was cancelled
            self.correlator.discard(request_id)

    async def notify(self, method: str, params: Any = None) -> None:
        """Send a notification; no id is assigned and no response is awaited"""
        if params is None:
            params = {}

        transport = await self.connection.acquire_transport()
        logger.debug(f"Sending notification: {method}")
        await transport.send(encode(build_notification(method, params)))
        increment_counter("rpc.client.notifications", 1, {"method": method})

    async def close(self) -> None:
        """Close the transport and fail requests that are still pending"""
        await self.connection.close()
        if self.correlator.pending_count:
            self.correlator.sweep_all(ConnectionClosedByCaller("Connection closed by caller"))

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
