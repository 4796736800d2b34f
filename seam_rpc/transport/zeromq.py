"""
ZeroMQ transport

DEALER socket transport on pyzmq's asyncio integration. Pairs with a ROUTER
socket on the peer side; each message is a single frame of JSON text.
"""

import asyncio
import contextlib
import logging
from typing import Optional

import zmq
import zmq.asyncio

from seam_rpc.errors import TransportError
from seam_rpc.transport.base import Transport, TransportState

logger = logging.getLogger(__name__)


class ZeroMQTransport(Transport):
    """ZeroMQ DEALER transport

    ZeroMQ reconnects underneath the socket and has no peer-close event, so a
    ROUTER peer going away is never reported through on_close. Requests sent
    to a dead peer fail by their own request timeout, not by a sweep. Only
    socket errors raised by recv reach on_error.
    """

    name = "ZeroMQ"

    def __init__(self, endpoint: str):
        super().__init__(endpoint)
        self.context: Optional[zmq.asyncio.Context] = None
        self.socket: Optional[zmq.asyncio.Socket] = None
        self._reader: Optional[asyncio.Task] = None

    async def open(self) -> None:
        if self._state is not TransportState.IDLE:
            raise TransportError(f"ZeroMQ cannot be reopened (state: {self._state.value})")

        self._set_state(TransportState.CONNECTING)
        try:
            self.context = zmq.asyncio.Context()
            self.socket = self.context.socket(zmq.DEALER)
            self.socket.setsockopt(zmq.LINGER, 0)
            # ZeroMQ connects lazily; the socket is usable immediately
            self.socket.connect(self.endpoint)
        except zmq.error.ZMQError as e:
            self._release()
            self._set_state(TransportState.CLOSED)
            raise TransportError(f"ZeroMQ error: {e}") from e

        self._set_state(TransportState.OPEN)
        self._reader = asyncio.create_task(self._read_loop())
        logger.info(f"ZeroMQ DEALER connected to {self.endpoint}")

    async def _read_loop(self) -> None:
        try:
            while self._state is TransportState.OPEN:
                frames = await self.socket.recv_multipart()
                # ROUTER peers may prepend an empty delimiter frame
                self._emit_message(frames[-1])
        except zmq.error.ZMQError as e:
            if self._state is TransportState.OPEN:
                logger.error(f"ZeroMQ receive failed: {e}")
                self._set_state(TransportState.CLOSING)
                self._emit_error(e)
                self._release()
                self._set_state(TransportState.CLOSED)

    async def send(self, data: str) -> None:
        if not self.is_open:
            raise TransportError(f"ZeroMQ is not open (state: {self._state.value})")
        try:
            await self.socket.send_string(data)
        except zmq.error.ZMQError as e:
            raise TransportError(f"ZeroMQ error: {e}") from e

    def _release(self) -> None:
        if self.socket is not None:
            self.socket.close(linger=0)
            self.socket = None
        if self.context is not None:
            self.context.term()
            self.context = None

    async def close(self) -> None:
        if self._state in (TransportState.CLOSING, TransportState.CLOSED):
            return

        self._set_state(TransportState.CLOSING)
        reader, self._reader = self._reader, None
        if reader is not None and reader is not asyncio.current_task():
            reader.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reader
        self._release()
        self._set_state(TransportState.CLOSED)
        logger.info(f"ZeroMQ connection to {self.endpoint} closed")
