""" Client configuration. Every setting has a built-in default, which can be
    overridden by the ``client.json`` file in the configuration
    :func:`directory`, which in turn can be overridden by an environment
    variable:

        ========== ================ ==================
        Setting    Environment      Default
        ========== ================ ==================
        server     FDBC_SERVER      localhost:8888
        timeout    FDBC_TIMEOUT     None (block)
        read_size  FDBC_READ_SIZE   100
        ========== ================ ==================

    The file is a JSON object, for example::

        {"server": "index.example.com:8888", "timeout": 5.0}
"""

import os
import threading

import msgspec

from .protocol import fields


DEFAULT_ADDRESS = 'localhost'
DEFAULT_PORT = 8888

filename = 'client.json'

_cache = dict()
_cache_lock = threading.Lock()


def directory(default=None):
    """ Return the configuration directory. Passing an absolute *default*
        path selects it for the rest of the process, creating it if needed;
        otherwise ``FDBC_HOME`` is used if set, and ``~/.fdbc`` if not.
    """

    if default is not None:
        default = os.path.expanduser(os.path.expandvars(str(default)))

        if not os.path.isabs(default):
            raise ValueError('the configuration directory must be an absolute path')

        os.makedirs(default, mode=0o775, exist_ok=True)
        os.environ['FDBC_HOME'] = default
        return default

    try:
        return os.environ['FDBC_HOME']
    except KeyError:
        return os.path.join(os.path.expanduser('~'), '.fdbc')



def clear():
    """ Discard the cached contents of the configuration file, forcing the
        next :func:`load` to read it again.
    """

    with _cache_lock:
        _cache.clear()


def load():
    """ Return the dictionary stored in the configuration file. An empty
        dictionary is returned if the file does not exist; a ValueError is
        raised if it exists but does not contain a JSON object. The contents
        are cached per directory after the first successful read.
    """

    path = os.path.join(directory(), filename)

    with _cache_lock:
        try:
            return _cache[path]
        except KeyError:
            pass

        try:
            with open(path, 'rb') as handle:
                raw = handle.read()
        except FileNotFoundError:
            loaded = dict()
        else:
            try:
                loaded = msgspec.json.decode(raw)
            except msgspec.DecodeError as error:
                raise ValueError('cannot parse %s: %s' % (path, error)) from error

            if not isinstance(loaded, dict):
                raise ValueError('%s must contain a JSON object' % (path))

        _cache[path] = loaded
        return loaded


def save(settings):
    """ Write *settings*, a dictionary, to the configuration file, creating
        the configuration directory if necessary.
    """

    home = directory()
    os.makedirs(home, exist_ok=True)
    path = os.path.join(home, filename)

    encoded = msgspec.json.encode(settings)

    with open(path, 'wb') as handle:
        handle.write(encoded)

    clear()


def _setting(name, environment):

    try:
        return os.environ[environment]
    except KeyError:
        pass

    return load().get(name)


def parse_address(address, default_port=DEFAULT_PORT):
    """ Split a 'host:port' string into a (host, port) tuple. IPv6 addresses
        must be enclosed in brackets, '[::1]:8888'. If no port is present
        *default_port* is used.
    """

    address = str(address).strip()

    if address == '':
        raise ValueError('empty server address')

    if address.startswith('['):
        host, bracket, remainder = address[1:].partition(']')
        if bracket == '' or host == '':
            raise ValueError('malformed IPv6 address: ' + repr(address))
        if remainder == '':
            port = default_port
        elif remainder.startswith(':'):
            port = remainder[1:]
        else:
            raise ValueError('malformed server address: ' + repr(address))
    elif address.count(':') == 1:
        host, port = address.split(':')
    elif ':' in address:
        raise ValueError('IPv6 addresses must be bracketed: ' + repr(address))
    else:
        host = address
        port = default_port

    if host == '':
        raise ValueError('no host in server address: ' + repr(address))

    try:
        port = int(port)
    except (TypeError, ValueError):
        raise ValueError('invalid port in server address: ' + repr(address))

    if port < 1 or port > 65535:
        raise ValueError('port out of range in server address: ' + repr(address))

    return host, port


def server():
    """ Return the (host, port) tuple of the default server.
    """

    address = _setting('server', 'FDBC_SERVER')

    if address is None:
        return DEFAULT_ADDRESS, DEFAULT_PORT

    return parse_address(address)


def timeout():
    """ Return the default socket timeout in seconds, or None to block
        indefinitely.
    """

    value = _setting('timeout', 'FDBC_TIMEOUT')

    if value is None or value == '':
        return None

    value = float(value)
    if value <= 0:
        raise ValueError('timeout must be positive, not %r' % (value))

    return value


def read_size():
    """ Return the maximum number of bytes accepted by a single bounded read.
    """

    value = _setting('read_size', 'FDBC_READ_SIZE')

    if value is None or value == '':
        return fields.READ_SIZE

    value = int(value)
    if value < 1:
        raise ValueError('read_size must be at least 1, not %r' % (value))

    return value


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
