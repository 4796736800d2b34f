"""
WebSocket transport

Text-frame duplex transport built on the websockets library.
"""

import asyncio
import contextlib
import logging
from typing import Any, Optional

import websockets
from websockets.exceptions import ConnectionClosed

from seam_rpc.errors import TransportError
from seam_rpc.transport.base import Transport, TransportState

logger = logging.getLogger(__name__)


class WebSocketTransport(Transport):
    """WebSocket transport with a background reader task"""

    name = "WebSocket"

    def __init__(self, endpoint: str, ping_interval: Optional[float] = 20, ping_timeout: Optional[float] = 20):
        super().__init__(endpoint)
        self.ping_interval = ping_interval
        self.ping_timeout = ping_timeout
        self._ws: Any = None
        self._reader: Optional[asyncio.Task] = None

    async def open(self) -> None:
        if self._state is not TransportState.IDLE:
            raise TransportError(f"WebSocket cannot be reopened (state: {self._state.value})")

        self._set_state(TransportState.CONNECTING)
        try:
            # Establishment timeout is owned by the connection manager
            ws = await websockets.connect(
                self.endpoint,
                open_timeout=None,
                ping_interval=self.ping_interval,
                ping_timeout=self.ping_timeout,
            )
        except Exception as e:
            self._set_state(TransportState.CLOSED)
            raise TransportError(f"WebSocket error: {e}") from e

        if self._state is not TransportState.CONNECTING:
            # close() won the race while the handshake was in flight
            await ws.close()
            raise TransportError("WebSocket closed: closed while connecting")

        self._ws = ws
        self._set_state(TransportState.OPEN)
        self._reader = asyncio.create_task(self._read_loop())
        logger.info(f"WebSocket connected to {self.endpoint}")

    async def _read_loop(self) -> None:
        ws = self._ws
        try:
            async for message in ws:
                self._emit_message(message)
        except ConnectionClosed:
            pass
        except Exception as e:
            if self._state is TransportState.OPEN:
                logger.error(f"WebSocket read failed: {e}")
                self._set_state(TransportState.CLOSING)
                self._emit_error(e)
                await ws.close()
                self._set_state(TransportState.CLOSED)
            return

        if self._state is TransportState.OPEN:
            reason = ws.close_reason or ""
            logger.warning(f"WebSocket closed by peer: code={ws.close_code} reason={reason!r}")
            self._set_state(TransportState.CLOSED)
            self._emit_close(reason)

    async def send(self, data: str) -> None:
        if not self.is_open:
            raise TransportError(f"WebSocket is not open (state: {self._state.value})")
        try:
            await self._ws.send(data)
        except ConnectionClosed as e:
            raise TransportError(f"WebSocket closed: {e}") from e

    async def close(self) -> None:
        if self._state in (TransportState.CLOSING, TransportState.CLOSED):
            return
        if self._ws is None:
            self._set_state(TransportState.CLOSED)
            return

        self._set_state(TransportState.CLOSING)
        try:
            await self._ws.close()
        finally:
            reader, self._reader = self._reader, None
            if reader is not None and reader is not asyncio.current_task():
                reader.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await reader
            self._set_state(TransportState.CLOSED)
            logger.info(f"WebSocket connection to {self.endpoint} closed")
