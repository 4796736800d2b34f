"""
Seam RPC

Awaitable JSON-RPC 2.0 request/response client over duplex message sockets.

1. Semantics: JSON-RPC 2.0 envelopes, responses matched to requests by id
2. Connection: opened lazily on first call, reopened after any failure
3. Adapters:
   - WebSocket (websockets)
   - ZeroMQ DEALER (pyzmq)

Outbound requests carry the OpenTelemetry trace context when a span is active.
"""

from seam_rpc.adapters.adapter_factory import AdapterFactory, AdapterType
from seam_rpc.adapters.websocket.client import WebSocketClient
from seam_rpc.adapters.zeromq.client import ZeroMQClient
from seam_rpc.config import ClientConfig
from seam_rpc.errors import (
    RpcError,
    EstablishmentTimeout,
    TransportError,
    ConnectionClosedByCaller,
    MalformedMessageError,
    RequestTimeout,
    RemoteError
)
from seam_rpc.rpc.client import RpcClient

__version__ = "0.1.0"

__all__ = [
    "AdapterFactory",
    "AdapterType",
    "ClientConfig",
    "RpcClient",
    "WebSocketClient",
    "ZeroMQClient",
    "RpcError",
    "EstablishmentTimeout",
    "TransportError",
    "ConnectionClosedByCaller",
    "MalformedMessageError",
    "RequestTimeout",
    "RemoteError"
]
