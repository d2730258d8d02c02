""" Serialize document metadata, a mapping of strings to strings, as a
    MessagePack map. MessagePack is self-describing, so no schema needs to
    be shared with the server.

    Nothing in this module looks for, or escapes, the control bytes used
    by the operand framing; MessagePack output can legitimately contain
    any byte value, including the ones the framing reserves. The check
    for that hazard happens in :func:`fdbc.protocol.operand.encode`.
"""

from typing import Dict, Mapping

import msgspec

from .errors import DecodeError, EncodeError


_encoder = msgspec.msgpack.Encoder()
_decoder = msgspec.msgpack.Decoder(Dict[str, str])


def encode(metadata: Mapping[str, str]) -> bytes:
    """ Return the MessagePack encoding of *metadata*. An
        :class:`EncodeError` is raised if any key or value is not a string,
        or if the serialization fails for any other reason.
    """

    if metadata is None:
        metadata = {}

    try:
        items = metadata.items()
    except AttributeError:
        raise EncodeError('metadata must be a mapping, not ' + type(metadata).__name__)

    # MessagePack would happily encode integer keys or nested values, but
    # the server only understands a flat map of strings.

    for key, value in items:
        if not isinstance(key, str):
            raise EncodeError('metadata key %r is not a string' % (key,))
        if not isinstance(value, str):
            raise EncodeError('metadata value for %r is not a string: %r' % (key, value))

    try:
        return _encoder.encode(dict(metadata))
    except (TypeError, ValueError, OverflowError) as error:
        raise EncodeError('cannot encode metadata: ' + str(error)) from error


def decode(encoded: bytes) -> Dict[str, str]:
    """ Return the metadata dictionary represented by *encoded*. A
        :class:`DecodeError` is raised if the bytes are not exactly one
        well-formed MessagePack map of strings to strings.
    """

    try:
        return _decoder.decode(encoded)
    except msgspec.DecodeError as error:
        raise DecodeError(str(error)) from error


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
