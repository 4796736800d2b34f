"""
Base Transport Interface

Abstract duplex message transport consumed by the connection manager.
"""

import abc
import enum
import logging
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)

MessageData = Union[str, bytes]


class TransportState(enum.Enum):
    """Lifecycle states of a transport handle"""
    IDLE = "idle"
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"


class Transport(abc.ABC):
    """
    Abstract base class for duplex transports.

    A transport moves through IDLE -> CONNECTING -> OPEN -> CLOSING -> CLOSED
    and is never reopened. Callbacks fire only for events the owner did not
    cause: a caller-initiated close() is silent.
    """

    name = "Transport"

    def __init__(self, endpoint: str):
        self.endpoint = endpoint
        self._state = TransportState.IDLE

        self.on_message: Optional[Callable[[MessageData], None]] = None
        self.on_error: Optional[Callable[[Exception], None]] = None
        self.on_close: Optional[Callable[[str], None]] = None

    @property
    def state(self) -> TransportState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is TransportState.OPEN

    def _set_state(self, state: TransportState) -> None:
        if state is not self._state:
            logger.debug(f"{self.name} {self.endpoint}: {self._state.value} -> {state.value}")
            self._state = state

    def _emit_message(self, data: MessageData) -> None:
        if self.on_message is not None:
            self.on_message(data)

    def _emit_error(self, error: Exception) -> None:
        if self.on_error is not None:
            self.on_error(error)

    def _emit_close(self, reason: str) -> None:
        if self.on_close is not None:
            self.on_close(reason)

    def detach(self) -> None:
        """Drop all installed callbacks"""
        self.on_message = None
        self.on_error = None
        self.on_close = None

    @abc.abstractmethod
    async def open(self) -> None:
        """
        Connect to the endpoint.

        Raises:
            TransportError: If the connection cannot be established
        """
        pass

    @abc.abstractmethod
    async def send(self, data: str) -> None:
        """
        Send one text message.

        Raises:
            TransportError: If the transport is not open or the write fails
        """
        pass

    @abc.abstractmethod
    async def close(self) -> None:
        """Close the transport; idempotent"""
        pass

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.endpoint} {self._state.value}>"
