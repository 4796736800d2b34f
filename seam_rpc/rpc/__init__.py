"""
JSON-RPC 2.0 Client Core

- connection: lazy single-transport connection management
- correlator: request id assignment, response routing, timeouts
- client: the call / notify / close surface
- envelope: request and response envelope helpers

This module is independent of the underlying transport.
"""
