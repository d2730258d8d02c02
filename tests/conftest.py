import os
import pytest
import socket
import threading

import fdbc


class LoopbackServer:
    """ Accept a single connection on the loopback interface, record every
        byte received, and answer commands registered via :func:`respond`.
        A response of None closes the connection instead of answering, and
        *close* closes it after answering.
    """

    def __init__(self):

        self.listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.listener.bind(('127.0.0.1', 0))
        self.listener.listen(1)
        self.listener.settimeout(5)

        self.address, self.port = self.listener.getsockname()
        self.received = bytearray()
        self.responses = list()
        self.done = threading.Event()

        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()


    def respond(self, command, response, close=False):
        self.responses.append((command, response, close))


    def run(self):

        try:
            connection, _ = self.listener.accept()
        except OSError:
            self.done.set()
            return

        searched = 0

        with connection:
            connection.settimeout(5)
            while True:
                try:
                    chunk = connection.recv(4096)
                except OSError:
                    break

                if chunk == b'':
                    break

                self.received += chunk

                if self.responses:
                    command, response, close = self.responses[0]
                    found = self.received.find(command, searched)
                    if found != -1:
                        searched = found + len(command)
                        self.responses.pop(0)
                        if response is None:
                            break
                        connection.sendall(response)
                        if close:
                            break

        self.done.set()


    def wait(self, timeout=5):
        return self.done.wait(timeout)


    def close(self):
        self.listener.close()



@pytest.fixture
def server():

    loopback = LoopbackServer()
    yield loopback
    loopback.close()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """ Point the configuration directory at an empty temporary directory,
        and clear any FDBC_ environment variables from the outside world.
    """

    for name in list(os.environ):
        if name.startswith('FDBC_'):
            monkeypatch.delenv(name)

    monkeypatch.setenv('FDBC_HOME', str(tmp_path))
    fdbc.config.clear()

    yield tmp_path

    fdbc.config.clear()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
