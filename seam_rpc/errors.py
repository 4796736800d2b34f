"""
RPC client error types

Global failures (EstablishmentTimeout, TransportError, MalformedMessageError)
reject every pending request. Local failures (RequestTimeout, RemoteError)
reject exactly one.
"""

from typing import Any, Optional


class RpcError(Exception):
    """Base exception for seam_rpc errors."""
    pass


class EstablishmentTimeout(RpcError, TimeoutError):
    """Transport did not reach the open state in time."""
    pass


class TransportError(RpcError, ConnectionError):
    """Underlying transport reported an error or closed unexpectedly."""
    pass


class ConnectionClosedByCaller(TransportError):
    """Raised into pending requests when the client is closed by its owner."""
    pass


class MalformedMessageError(RpcError, ValueError):
    """An inbound payload could not be parsed."""
    pass


class RequestTimeout(RpcError, TimeoutError):
    """A single request received no response in time."""
    pass


class RemoteError(RpcError):
    """Error envelope returned by the peer for one request.

    ``str(error)`` is the peer's message text, so callers comparing
    against e.g. ``"Method not found"`` need nothing else.
    """

    def __init__(self, message: str, code: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data
