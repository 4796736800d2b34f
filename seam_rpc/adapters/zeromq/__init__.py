"""
ZeroMQ Adapter Package

JSON-RPC 2.0 client over a ZeroMQ DEALER socket.
"""

from seam_rpc.adapters.zeromq.client import ZeroMQClient

__all__ = ["ZeroMQClient"]
