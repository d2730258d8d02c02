"""TCP stream transport."""

from __future__ import annotations

import logging
import socket
from typing import Optional

from .base import NotConnected, Transport, TransportConnectionError, TransportError


log = logging.getLogger(__name__)


class TcpTransport(Transport):
    """ A single blocking TCP connection to *address* and *port*. The
        optional *timeout*, in seconds, applies both to establishing the
        connection and to every subsequent send or receive; None means
        block indefinitely.

        Socket errors after the connection is established are not
        translated; they propagate as the :class:`OSError` raised by the
        socket module.
    """

    chunk_size = 4096

    def __init__(self, address: str, port: int, timeout: Optional[float] = None):

        self.address = address
        self.port = int(port)
        self.timeout = timeout

        self._socket: Optional[socket.socket] = None


    def __repr__(self):
        state = 'open' if self.is_open else 'closed'
        return '<TcpTransport %s:%d %s>' % (self.address, self.port, state)


    @property
    def is_open(self) -> bool:
        return self._socket is not None


    def open(self) -> None:

        if self._socket is not None:
            return

        target = (self.address, self.port)

        try:
            sock = socket.create_connection(target, timeout=self.timeout)
        except OSError as error:
            raise TransportConnectionError('cannot connect to %s:%d: %s' % (self.address, self.port, error)) from error

        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        self._socket = sock
        log.debug('connected to %s:%d', self.address, self.port)


    def close(self) -> None:

        sock = self._socket
        if sock is None:
            return

        self._socket = None
        sock.close()
        log.debug('closed connection to %s:%d', self.address, self.port)


    def _connected(self) -> socket.socket:

        sock = self._socket
        if sock is None:
            raise NotConnected('no connection to %s:%d' % (self.address, self.port))

        return sock


    def send(self, data: bytes) -> None:
        sock = self._connected()
        sock.sendall(data)
        log.debug('sent %d bytes to %s:%d', len(data), self.address, self.port)


    def recv(self, size: int) -> bytes:
        """ Perform a single receive of at most *size* bytes. A
            :class:`TransportConnectionError` is raised if the remote side
            closed the connection before sending anything.
        """

        sock = self._connected()
        data = sock.recv(size)

        if data == b'':
            raise TransportConnectionError('connection closed by %s:%d' % (self.address, self.port))

        log.debug('received %d bytes from %s:%d', len(data), self.address, self.port)
        return data


    def recv_until(self, terminator: int, limit: Optional[int] = None) -> bytes:
        """ Receive until the *terminator* byte arrives, returning everything
            before it. The end of the stream also ends the response, as long
            as something arrived first. If *limit* is set and the response
            runs past that many bytes, :class:`TransportError` is raised rather
            than returning a partial or oversized response. Bytes after the
            terminator in the same receive are discarded.
        """

        sock = self._connected()
        received = bytearray()
        searched = 0

        while True:
            chunk = sock.recv(self.chunk_size)

            if chunk == b'':
                if received:
                    break
                raise TransportConnectionError('connection closed by %s:%d' % (self.address, self.port))

            received += chunk

            end = received.find(terminator, searched)
            if end != -1:
                if limit is not None and end > limit:
                    raise TransportError('response of %d bytes exceeds the %d byte limit' % (end, limit))
                if end + 1 < len(received):
                    log.debug('discarding %d bytes after terminator', len(received) - end - 1)
                del received[end:]
                break

            searched = len(received)

            if limit is not None and len(received) > limit:
                raise TransportError('no terminator in the first %d bytes of the response' % (len(received)))

        log.debug('received %d bytes from %s:%d', len(received), self.address, self.port)
        return bytes(received)


# end of class TcpTransport


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
