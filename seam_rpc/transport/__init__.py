"""
Transport Module

Duplex message transports consumed by the connection manager:
- websocket: WebSocket text frames (websockets)
- zeromq: ZeroMQ DEALER socket (pyzmq asyncio)
"""

from .base import Transport, TransportState
from .websocket import WebSocketTransport
from .zeromq import ZeroMQTransport

__all__ = [
    "Transport",
    "TransportState",
    "WebSocketTransport",
    "ZeroMQTransport"
]
