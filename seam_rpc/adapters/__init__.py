"""
Client Adapters Module

Adapter implementations providing one awaitable interface over different transports:
- websocket: WebSocket text frames
- zeromq: ZeroMQ DEALER socket

Build clients through seam_rpc.adapters.adapter_factory.AdapterFactory.
"""

from .adapter_interface import ClientAdapterInterface

__all__ = [
    "ClientAdapterInterface"
]
