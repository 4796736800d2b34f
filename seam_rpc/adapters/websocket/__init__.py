"""
WebSocket Adapter Package

JSON-RPC 2.0 client over a lazily established WebSocket connection.
"""

from seam_rpc.adapters.websocket.client import WebSocketClient

__all__ = ["WebSocketClient"]
