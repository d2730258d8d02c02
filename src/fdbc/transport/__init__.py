"""Transport layer implementations."""

from .base import (
    Transport,
    TransportError,
    NotConnected,
    TransportConnectionError,
    ConnectError,
)
from .tcp import TcpTransport
