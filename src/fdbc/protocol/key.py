""" Derive the fixed-size document key from a URL. The key is the 64-bit
    xxHash of the UTF-8 URL, serialized little-endian. Distinct URLs may
    collide; colliding documents alias under the same key on the server,
    and nothing here attempts to detect that.
"""

import struct

import xxhash

from . import fields


_packer = struct.Struct('<Q')

assert _packer.size == fields.KEY_SIZE


def _as_bytes(url):

    # Lone surrogates cannot go into an operand, but they still hash.

    try:
        url = url.encode('utf-8', 'surrogatepass')
    except AttributeError:
        pass

    if isinstance(url, (bytes, bytearray, memoryview)):
        return bytes(url)

    raise TypeError('url must be str or bytes, not ' + type(url).__name__)


def integer(url):
    """ Return the unsigned 64-bit hash of the supplied *url*.
    """

    return xxhash.xxh64_intdigest(_as_bytes(url))


def hash(url):
    """ Return the 8-byte key for the supplied *url*. The same *url* always
        produces the same key, regardless of process or platform.
    """

    return _packer.pack(integer(url))


def unpack(key):
    """ Inverse of :func:`hash` as far as it can be: return the integer
        value encoded in an 8-byte *key*.
    """

    if len(key) != fields.KEY_SIZE:
        raise ValueError('key must be %d bytes, not %d' % (fields.KEY_SIZE, len(key)))

    return _packer.unpack(key)[0]


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
