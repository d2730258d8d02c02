"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`fdbc.protocol` so the protocol remains transport-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class NotConnected(TransportError):
    """An operation was attempted without an open connection."""


class TransportConnectionError(TransportError, ConnectionError):
    """The transport could not establish or maintain a connection."""


ConnectError = TransportConnectionError


class Transport(ABC):
    """Minimal contract for a byte-stream transport."""

    @abstractmethod
    def open(self) -> None:
        """Establish the underlying connection."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection; a no-op if not open."""

    @abstractmethod
    def send(self, data: bytes) -> None:
        """Send all of *data*."""

    @abstractmethod
    def recv(self, size: int) -> bytes:
        """Receive at most *size* bytes, blocking until some arrive."""

    @abstractmethod
    def recv_until(self, terminator: int, limit: Optional[int] = None) -> bytes:
        """Receive until *terminator* or end of stream; terminator excluded."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False
