"""
fdbc Protocol Layer
===================

This package defines how documents are represented on the wire. Nothing
here opens a socket; the transport layer moves the bytes produced and
consumed by these modules.

Layers, leaves first:

Field Vocabulary (fields.py)
    Control bytes, key size, read command code.

Key Hasher (key.py)
    url -> 8-byte little-endian xxHash64 key.

Metadata Codec (metadata.py)
    dict[str, str] <-> MessagePack map.

Operand (operand.py)
    Document <-> delimited operand bytes.

Errors (errors.py)
    EncodeError and FrameError hierarchies.
"""

from . import fields
from . import errors
from . import key
from . import metadata
from . import operand

from .errors import (
    ProtocolError,
    EncodeError,
    DelimiterError,
    DecodeError,
    FrameError,
    Truncated,
    MissingDelimiter,
    UnexpectedEOF,
    BadMetadata,
    InvalidText,
)
from .operand import Document, encode, decode, parse


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
