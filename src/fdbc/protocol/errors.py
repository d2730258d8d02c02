"""Protocol exceptions.

These are raised by the encoding and decoding routines in
:mod:`fdbc.protocol`; none of them are ever retried or recovered from
internally, it is up to the caller to decide whether to discard, log, or
propagate a failed encode or decode.
"""

from __future__ import annotations

from typing import Optional

from . import fields


class ProtocolError(Exception):
    """Base class for all protocol-layer errors."""


class EncodeError(ProtocolError, ValueError):
    """A document could not be represented as an operand."""


class DelimiterError(EncodeError):
    """A field contains one of the reserved control bytes."""

    def __init__(self, field: str, value: int, offset: int):
        self.field = field
        self.value = value
        self.offset = offset

        name = fields.NAMES.get(value, 'control byte')
        message = '%s (0x%02x) at offset %d in %s' % (name, value, offset, field)
        EncodeError.__init__(self, message)


class DecodeError(ProtocolError, ValueError):
    """Bytes could not be decoded as a metadata map."""


class FrameError(ProtocolError, ValueError):
    """ An operand does not have the expected structure. The *field*
        attribute identifies which part of the frame was being read when
        the violation was encountered.
    """

    def __init__(self, field: str, detail: Optional[str] = None):
        self.field = field
        self.detail = detail

        message = self.describe(field)
        if detail:
            message = message + ': ' + detail

        ProtocolError.__init__(self, message)


    def describe(self, field: str) -> str:
        return 'malformed frame at ' + field


class Truncated(FrameError):
    """Fewer bytes remain than the fixed-size field requires."""

    def describe(self, field):
        return 'frame truncated reading ' + field


class MissingDelimiter(FrameError):
    """An expected delimiter byte was absent or mismatched."""

    def describe(self, field):
        return 'expected ' + field


class UnexpectedEOF(FrameError):
    """The input ended before a text field was terminated."""

    def describe(self, field):
        return 'unexpected end of input in ' + field


class BadMetadata(FrameError):
    """The metadata field could not be decoded."""

    def describe(self, field):
        return 'invalid ' + field


class InvalidText(FrameError):
    """A text field is not valid UTF-8."""

    def describe(self, field):
        return 'invalid UTF-8 in ' + field


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
