"""
Request correlation

Tracks in-flight requests by id and settles each exactly once: by its matching
response, by its own timeout, or by a global sweep.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from seam_rpc.config import DEFAULT_TIMEOUT_MS
from seam_rpc.errors import MalformedMessageError, RequestTimeout
from seam_rpc.rpc.envelope import build_request, decode, error_from_response, response_id
from seam_rpc.telemetry.metrics import increment_counter, record_latency

logger = logging.getLogger(__name__)


def default_id_generator() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class PendingRequest:
    """One in-flight call awaiting its response"""
    id: str
    method: str
    future: asyncio.Future
    timeout_handle: asyncio.TimerHandle
    started_at: float

    def resolve(self, result: Any) -> None:
        self.timeout_handle.cancel()
        if not self.future.done():
            self.future.set_result(result)

    def reject(self, error: BaseException) -> None:
        self.timeout_handle.cancel()
        if not self.future.done():
            self.future.set_exception(error)


class PendingRequestTable:
    """
    Owner of the id -> PendingRequest mapping.

    An id is present if and only if its request is still unsettled, so every
    settlement path removes the entry before acting on it.
    """

    def __init__(self):
        self._entries: Dict[str, PendingRequest] = {}

    def add(self, entry: PendingRequest) -> None:
        if entry.id in self._entries:
            raise ValueError(f"Duplicate pending request id: {entry.id}")
        self._entries[entry.id] = entry

    def pop(self, request_id: str) -> Optional[PendingRequest]:
        return self._entries.pop(request_id, None)

    def discard(self, request_id: str) -> None:
        """Remove an entry without settling it"""
        entry = self._entries.pop(request_id, None)
        if entry is not None:
            entry.timeout_handle.cancel()

    def sweep(self) -> List[PendingRequest]:
        """Remove and return every entry"""
        entries = list(self._entries.values())
        self._entries.clear()
        return entries

    def ids(self) -> List[str]:
        return list(self._entries)

    def __contains__(self, request_id: str) -> bool:
        return request_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class RequestCorrelator:
    """Assigns ids to outbound requests and routes inbound responses to them"""

    def __init__(self,
                 timeout_ms: int = DEFAULT_TIMEOUT_MS,
                 id_generator: Optional[Callable[[], str]] = None):
        """
        Args:
            timeout_ms: Per-request timeout in milliseconds, counted from registration
            id_generator: Callable returning a fresh request id
        """
        self.timeout_ms = timeout_ms
        self._id_generator = id_generator or default_id_generator
        self._pending = PendingRequestTable()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def pending_ids(self) -> List[str]:
        return self._pending.ids()

    def is_pending(self, request_id: str) -> bool:
        return request_id in self._pending

    def register(self, method: str, params: Any) -> Tuple[Dict[str, Any], asyncio.Future]:
        """Register a new pending request and start its timeout clock

        Returns:
            Tuple of the request envelope and the future that will carry its outcome

        Raises:
            ValueError: The id generator produced an id that is still pending
        """
        loop = asyncio.get_running_loop()
        request_id = str(self._id_generator())
        if request_id in self._pending:
            raise ValueError(f"Duplicate pending request id: {request_id}")

        request = build_request(request_id, method, params)
        future = loop.create_future()
        timeout_handle = loop.call_later(self.timeout_ms / 1000.0, self._expire, request_id)

        self._pending.add(PendingRequest(
            id=request_id,
            method=method,
            future=future,
            timeout_handle=timeout_handle,
            started_at=loop.time(),
        ))
        increment_counter("rpc.client.requests", 1, {"method": method})

        return request, future

    def _expire(self, request_id: str) -> None:
        entry = self._pending.pop(request_id)
        if entry is None:
            return
        logger.warning(f"Request {request_id} ({entry.method}) timed out after {self.timeout_ms}ms")
        increment_counter("rpc.client.errors", 1, {"type": "timeout", "method": entry.method})
        entry.reject(RequestTimeout(f"Request timed out after {self.timeout_ms}ms"))

    def route_message(self, raw: Union[str, bytes]) -> None:
        """Settle the pending request addressed by an inbound envelope

        Unparsable payloads fail every pending request. Well-formed envelopes
        without a known id are dropped.
        """
        try:
            envelope = decode(raw)
        except MalformedMessageError as e:
            self.sweep_all(e)
            return

        request_id = response_id(envelope)
        if request_id is None:
            logger.debug("Dropping inbound message without request id")
            return

        entry = self._pending.pop(request_id)
        if entry is None:
            logger.debug(f"Dropping response for unknown request id {request_id}")
            return

        latency_ms = (asyncio.get_running_loop().time() - entry.started_at) * 1000
        record_latency("rpc.client.latency", latency_ms, {"method": entry.method})

        error = error_from_response(envelope)
        if error is not None:
            logger.debug(f"Request {request_id} failed remotely: {error.message} (code {error.code})")
            increment_counter("rpc.client.errors", 1, {
                "type": "remote_error",
                "method": entry.method,
                "code": str(error.code)
            })
            entry.reject(error)
        else:
            logger.debug(f"Request {request_id} completed in {latency_ms:.2f}ms")
            increment_counter("rpc.client.success", 1, {"method": entry.method})
            entry.resolve(envelope.get("result"))

    def reject(self, request_id: str, error: BaseException) -> bool:
        """Settle one pending request with an error

        Returns:
            bool: False if the request was already settled
        """
        entry = self._pending.pop(request_id)
        if entry is None:
            return False
        entry.reject(error)
        return True

    def discard(self, request_id: str) -> None:
        self._pending.discard(request_id)

    def sweep_all(self, error: BaseException) -> None:
        """Reject every pending request with the same error and clear the table"""
        entries = self._pending.sweep()
        logger.error(f"RPC transport failure, rejecting {len(entries)} pending request(s): {error}")
        if entries:
            increment_counter("rpc.client.sweeps", 1, {"type": type(error).__name__})
        for entry in entries:
            entry.reject(error)
