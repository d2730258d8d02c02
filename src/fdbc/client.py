""" The :class:`Client` is the principal entry point for talking to an
    indexing server: submit documents with :func:`Client.write`, look up a
    token with :func:`Client.read`.
"""

import logging
import threading

from . import config
from .protocol import fields
from .protocol import operand
from .transport import TcpTransport


log = logging.getLogger(__name__)


class Client:
    """ A :class:`Client` owns one connection to the server at *address* and
        *port*; if either is omitted the configured default is used, see
        :func:`fdbc.config.server`. The *timeout* and *read_size* arguments
        likewise default to the configured values.

        The connection is not established until :func:`open` is called, or
        the client is used as a context manager. Every exchange with the
        server holds a per-client lock, so a single instance can be shared
        between threads; a read command and its response are never
        interleaved with another thread's traffic.

        :ivar transport: The :class:`fdbc.transport.TcpTransport` instance.
        :ivar read_size: Maximum size of a bounded :func:`read` response.
    """

    def __init__(self, address=None, port=None, timeout=None, read_size=None):

        if address is None or port is None:
            default_address, default_port = config.server()
            if address is None:
                address = default_address
            if port is None:
                port = default_port

        if timeout is None:
            timeout = config.timeout()

        if read_size is None:
            read_size = config.read_size()

        read_size = int(read_size)
        if read_size < 1:
            raise ValueError('read_size must be at least 1, not %r' % (read_size))

        self.read_size = read_size
        self.transport = TcpTransport(address, port, timeout)
        self._lock = threading.Lock()


    def __enter__(self):
        self.open()
        return self


    def __exit__(self, *exception):
        self.close()


    def __repr__(self):
        return '<Client %r>' % (self.transport)


    @property
    def address(self):
        return self.transport.address


    @property
    def port(self):
        return self.transport.port


    @property
    def is_open(self):
        return self.transport.is_open


    def open(self):
        """ Connect to the server. A :class:`fdbc.transport.ConnectError`
            is raised if the connection cannot be established. Calling
            :func:`open` on a connected client does nothing.
        """

        with self._lock:
            self.transport.open()


    def close(self):
        """ Release the connection. It is safe to call this method on a
            client that is not connected.
        """

        with self._lock:
            self.transport.close()


    def write(self, url, tokens=(), metadata=None):
        """ Encode a document and send it to the server. The document is
            encoded before anything is sent, so an
            :class:`fdbc.protocol.EncodeError` never leaves a partial
            operand on the wire.
        """

        encoded = operand.encode(url, tokens, metadata)
        self.write_operand(encoded)


    def write_document(self, document):
        """ Send a :class:`fdbc.protocol.Document` to the server.
        """

        self.write_operand(document.encapsulate())


    def write_operand(self, encoded):
        """ Send already-encoded operand bytes to the server, unmodified.
        """

        with self._lock:
            self.transport.send(encoded)


    def _read_command(self, token):

        try:
            token = token.encode('utf-8')
        except AttributeError:
            if not isinstance(token, (bytes, bytearray, memoryview)):
                raise TypeError('token must be str or bytes, not ' + type(token).__name__)
            token = bytes(token)

        # The token is neither length-prefixed nor terminated; the server
        # is left to work out where the command ends.

        return bytes((fields.READ,)) + token


    def read(self, token, size=None):
        """ Ask the server for the value associated with *token*. The
            response is whatever arrives in a single receive, at most *size*
            bytes (default :attr:`read_size`); a longer response is
            truncated, and whatever is left of it will be seen by the next
            read on this connection. Use :func:`read_until` if the server
            terminates its responses.
        """

        if size is None:
            size = self.read_size
        elif size < 1:
            raise ValueError('size must be at least 1, not %r' % (size))

        command = self._read_command(token)

        with self._lock:
            self.transport.send(command)
            response = self.transport.recv(size)

        if len(response) == size:
            log.warning('read response for %r filled the %d byte buffer, it may be truncated', token, size)

        return response


    def read_until(self, token, terminator=fields.ETB, limit=None):
        """ Ask the server for the value associated with *token*, and
            accumulate the response until the *terminator* byte arrives or
            the server closes the connection. The terminator is not
            included in the returned bytes. If *limit* is set, a
            :class:`fdbc.transport.TransportError` is raised when the
            response runs past that many bytes.
        """

        command = self._read_command(token)

        with self._lock:
            self.transport.send(command)
            response = self.transport.recv_until(terminator, limit)

        return response


# end of class Client



def connect(address=None, port=None, **kwargs):
    """ Return a new, connected :class:`Client`. Keyword arguments are
        passed through to the :class:`Client` constructor.
    """

    client = Client(address, port, **kwargs)
    client.open()
    return client


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
