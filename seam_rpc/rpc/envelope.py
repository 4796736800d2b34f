"""
JSON-RPC 2.0 envelope helpers
"""

import json
from typing import Any, Dict, Optional, Union

from seam_rpc.errors import MalformedMessageError, RemoteError
from seam_rpc.telemetry.tracer import inject_trace_context

JSONRPC_VERSION = "2.0"


def build_request(request_id: str, method: str, params: Any) -> Dict[str, Any]:
    """Build a request envelope, attaching the active trace context if any"""
    request = {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "method": method,
        "params": params,
    }

    trace_context = inject_trace_context()
    if trace_context:
        request["trace_context"] = trace_context

    return request


def build_notification(method: str, params: Any) -> Dict[str, Any]:
    """Build a notification envelope (no id, no response expected)"""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "method": method,
        "params": params,
    }


def encode(envelope: Dict[str, Any]) -> str:
    return json.dumps(envelope)


def decode(raw: Union[str, bytes]) -> Any:
    """Parse an inbound payload

    Raises:
        MalformedMessageError: Payload is not UTF-8 JSON
    """
    try:
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        return json.loads(raw)
    except (UnicodeDecodeError, ValueError, TypeError) as e:
        raise MalformedMessageError(f"Failed to parse message: {e}") from e


def response_id(envelope: Any) -> Optional[str]:
    """Return the id of a response envelope, or None if it addresses no request"""
    if not isinstance(envelope, dict):
        return None
    request_id = envelope.get("id")
    # Request ids are always minted as strings
    if not isinstance(request_id, str) or not request_id:
        return None
    return request_id


def error_from_response(envelope: Dict[str, Any]) -> Optional[RemoteError]:
    """Build a RemoteError from the envelope's error member, if present"""
    error = envelope.get("error")
    if not error:
        return None
    if isinstance(error, dict):
        return RemoteError(
            str(error.get("message") or "Unknown error"),
            code=error.get("code"),
            data=error.get("data"),
        )
    return RemoteError(str(error))
